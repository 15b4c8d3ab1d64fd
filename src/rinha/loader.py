"""Build term trees from the JSON representation of a parsed program."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TextIO

from rinha import terms as ast
from rinha.errors import MalformedTree

logger = logging.getLogger(__name__)


def load_path(path: str | Path) -> ast.File:
    with open(path) as fd:
        return load(fd)


def load(fd: TextIO) -> ast.File:
    return parse_file(json.load(fd))


def loads(src: str) -> ast.File:
    return parse_file(json.loads(src))


def parse_file(obj: Any) -> ast.File:
    match obj:
        case {"expression": expr, **rest}:
            file = ast.File(
                rest.get("name", ""),
                parse_term(expr),
                parse_location(rest.get("location")),
            )
            logger.debug("loaded program %r", file.name)
            return file
        case _:
            raise MalformedTree("expected a file object", obj)


def parse_location(obj: Any) -> ast.Location:
    match obj:
        case None:
            return ast.NOWHERE
        case {"start": int(start), "end": int(end), **rest}:
            return ast.Location(start, end, rest.get("filename", ""))
        case _:
            raise MalformedTree("invalid location", obj)


def parse_parameter(obj: Any) -> ast.Parameter:
    match obj:
        case {"text": str(text), **rest}:
            return ast.Parameter(text, parse_location(rest.get("location")))
        case _:
            raise MalformedTree("invalid parameter", obj)


def parse_op(obj: Any) -> ast.BinaryOp:
    try:
        return ast.BinaryOp(obj)
    except ValueError:
        raise MalformedTree("unknown binary operator", obj) from None


def parse_term(obj: Any) -> ast.Term:
    if not isinstance(obj, dict):
        raise MalformedTree("expected a term object", obj)
    loc = parse_location(obj.get("location"))

    match obj:
        case {"kind": "Int", "value": int(value)} if not isinstance(value, bool):
            return ast.Int(value, loc)
        case {"kind": "Int", "value": float(value)} if value.is_integer():
            return ast.Int(int(value), loc)
        case {"kind": "Str", "value": str(value)}:
            return ast.Str(value, loc)
        case {"kind": "Bool", "value": bool(value)}:
            return ast.Bool(value, loc)
        case {"kind": "If", "condition": c, "then": t, "otherwise": o}:
            return ast.If(parse_term(c), parse_term(t), parse_term(o), loc)
        case {"kind": "Let", "name": name, "value": value, "next": nxt}:
            return ast.Let(parse_parameter(name), parse_term(value), parse_term(nxt), loc)
        case {"kind": "Binary", "lhs": lhs, "op": op, "rhs": rhs}:
            return ast.Binary(parse_term(lhs), parse_op(op), parse_term(rhs), loc)
        case {"kind": "Function", "parameters": list(params), "value": body}:
            return ast.Function(
                tuple(parse_parameter(p) for p in params), parse_term(body), loc
            )
        case {"kind": "Call", "callee": callee, "arguments": list(args)}:
            return ast.Call(
                parse_term(callee), tuple(parse_term(a) for a in args), loc
            )
        case {"kind": "Tuple", "first": fst, "second": snd}:
            return ast.Tuple(parse_term(fst), parse_term(snd), loc)
        case {"kind": "First", "value": value}:
            return ast.First(parse_term(value), loc)
        case {"kind": "Second", "value": value}:
            return ast.Second(parse_term(value), loc)
        case {"kind": "Print", "value": value}:
            return ast.Print(parse_term(value), loc)
        case {"kind": "Var", "text": str(text)}:
            return ast.Var(text, loc)
        case {"kind": kind}:
            raise MalformedTree(f"invalid {kind} term", obj)
        case _:
            raise MalformedTree("term without kind", obj)
