from __future__ import annotations

import abc
import dataclasses
import enum


@dataclasses.dataclass(frozen=True)
class Location:
    start: int = 0
    end: int = 0
    filename: str = ""


NOWHERE = Location()


class BinaryOp(enum.Enum):
    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    REM = "Rem"
    EQ = "Eq"
    NEQ = "Neq"
    LT = "Lt"
    GT = "Gt"
    LTE = "Lte"
    GTE = "Gte"
    AND = "And"
    OR = "Or"


@dataclasses.dataclass(frozen=True)
class Parameter:
    text: str
    location: Location = NOWHERE


class Term(abc.ABC):
    location: Location


@dataclasses.dataclass(frozen=True)
class Int(Term):
    value: int
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Str(Term):
    value: str
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Bool(Term):
    value: bool
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class If(Term):
    condition: Term
    then: Term
    otherwise: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Let(Term):
    name: Parameter
    value: Term
    next: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Binary(Term):
    lhs: Term
    op: BinaryOp
    rhs: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Function(Term):
    parameters: tuple[Parameter, ...]
    value: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Call(Term):
    callee: Term
    arguments: tuple[Term, ...]
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Tuple(Term):
    first: Term
    second: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class First(Term):
    value: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Second(Term):
    value: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Var(Term):
    text: str
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class Print(Term):
    value: Term
    location: Location = NOWHERE


@dataclasses.dataclass(frozen=True)
class File:
    name: str
    expression: Term
    location: Location = NOWHERE


TRUE = Bool(True)
FALSE = Bool(False)


def let(name: str, value: Term, body: Term) -> Let:
    return Let(Parameter(name), value, body)


def function(params: list[str], body: Term) -> Function:
    return Function(tuple(Parameter(p) for p in params), body)


def call(callee: Term, *args: Term) -> Call:
    return Call(callee, args)


def binary(lhs: Term, op: BinaryOp | str, rhs: Term) -> Binary:
    return Binary(lhs, BinaryOp(op), rhs)


def children(term: Term) -> tuple[Term, ...]:
    match term:
        case Int() | Str() | Bool() | Var():
            return ()
        case If(a, b, c):
            return a, b, c
        case Let(_, val, body):
            return val, body
        case Binary(a, _, b):
            return a, b
        case Function(_, body):
            return (body,)
        case Call(fun, args):
            return (fun, *args)
        case Tuple(a, b):
            return a, b
        case First(x) | Second(x) | Print(x):
            return (x,)
        case _:
            raise NotImplementedError(term)


def free_vars(term: Term) -> set[str]:
    match term:
        case Var(name):
            return {name}
        case Let(name, val, body):
            return free_vars(val) | (free_vars(body) - {name.text})
        case Function(params, body):
            return free_vars(body) - {p.text for p in params}
        case _:
            fvs = set()
            for child in children(term):
                fvs |= free_vars(child)
            return fvs
