from __future__ import annotations

import dataclasses
import logging
import math
import sys
from typing import TextIO

from rinha import terms as ast
from rinha.environment import EMPTY, Env
from rinha.errors import ArityMismatch, Fault, TypeMismatch
from rinha.values import (
    Boolean,
    Closure,
    Number,
    String,
    Tuple,
    Value,
    as_boolean,
    as_closure,
    as_number,
    as_text,
    as_tuple,
    show,
    to_number,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Ok:
    value: Value


@dataclasses.dataclass(frozen=True)
class Err:
    fault: Fault


Result = Ok | Err


class Interpreter:
    def __init__(self, out: TextIO | None = None):
        self.out = out

    def run_file(self, file: ast.File) -> Result:
        logger.debug("evaluating %s", file.name)
        try:
            value = self.evaluate(file.expression, EMPTY)
        except Fault as e:
            logger.debug("evaluation of %s aborted: %s", file.name, e)
            return Err(e)
        logger.debug("evaluation of %s finished", file.name)
        return Ok(value)

    def evaluate(self, expr: ast.Term, env: Env) -> Value:
        while True:
            match expr:
                case ast.Int(val):
                    return Number(to_number(val))
                case ast.Str(val):
                    return String(val)
                case ast.Bool(val):
                    return Boolean(val)
                case ast.Var(name):
                    return env.lookup(name)
                case ast.If(condition, then, otherwise):
                    if as_boolean(self.evaluate(condition, env)):
                        expr = then
                    else:
                        expr = otherwise
                case ast.Let(name, val, body):
                    env = env.extend(name.text, self.evaluate(val, env))
                    expr = body
                case ast.Binary(lhs, op, rhs):
                    a = self.evaluate(lhs, env)
                    b = self.evaluate(rhs, env)
                    return apply_binary(op, a, b)
                case ast.Function(params, body):
                    return Closure(tuple(p.text for p in params), body, env)
                case ast.Call(fun, args):
                    closure = as_closure(self.evaluate(fun, env))
                    if len(closure.parameters) != len(args):
                        raise ArityMismatch(len(closure.parameters), len(args))
                    vals = [self.evaluate(arg, env) for arg in args]
                    env = closure.captured_env.extend_many(closure.parameters, vals)
                    expr = closure.body
                case ast.Tuple(fst, snd):
                    a = self.evaluate(fst, env)
                    b = self.evaluate(snd, env)
                    return Tuple(a, b)
                case ast.First(tup):
                    return as_tuple(self.evaluate(tup, env))[0]
                case ast.Second(tup):
                    return as_tuple(self.evaluate(tup, env))[1]
                case ast.Print(exp):
                    val = self.evaluate(exp, env)
                    print(show(val), file=self.out or sys.stdout)
                    return val
                case _:
                    raise NotImplementedError(expr)


def evaluate(expr: ast.Term, env: Env = EMPTY) -> Value:
    return Interpreter().evaluate(expr, env)


def try_evaluate(expr: ast.Term, env: Env = EMPTY) -> Result:
    try:
        return Ok(evaluate(expr, env))
    except Fault as e:
        return Err(e)


def interpret_file(file: ast.File, out: TextIO | None = None) -> Result:
    return Interpreter(out).run_file(file)


def apply_binary(op: ast.BinaryOp, a: Value, b: Value) -> Value:
    match op:
        case ast.BinaryOp.ADD:
            match a, b:
                case Number(x), Number(y):
                    return Number(x + y)
                case _:
                    return String(as_text(a) + as_text(b))
        case ast.BinaryOp.EQ:
            return Boolean(is_equal(a, b))
        case ast.BinaryOp.NEQ:
            return Boolean(not is_equal(a, b))
        case ast.BinaryOp.AND:
            x = as_boolean(a)
            y = as_boolean(b)
            return Boolean(x and y)
        case ast.BinaryOp.OR:
            x = as_boolean(a)
            y = as_boolean(b)
            return Boolean(x or y)

    x = as_number(a)
    y = as_number(b)
    match op:
        case ast.BinaryOp.SUB:
            return Number(x - y)
        case ast.BinaryOp.MUL:
            return Number(x * y)
        case ast.BinaryOp.DIV:
            return Number(floor(divide(x, y)))
        case ast.BinaryOp.REM:
            return Number(floor(remainder(x, y)))
        case ast.BinaryOp.LT:
            return Boolean(x < y)
        case ast.BinaryOp.GT:
            return Boolean(x > y)
        case ast.BinaryOp.LTE:
            return Boolean(x <= y)
        case ast.BinaryOp.GTE:
            return Boolean(x >= y)
        case _:
            raise NotImplementedError(op)


def is_equal(a: Value, b: Value) -> bool:
    match a, b:
        case Number(x), Number(y):
            return abs(x - y) < sys.float_info.epsilon
        case String(x), String(y):
            return x == y
        case Boolean(x), Boolean(y):
            return x == y
        case _:
            raise TypeMismatch("number or string or boolean")


def divide(x: float, y: float) -> float:
    """IEEE 754 division, which Python's `/` refuses to do for a zero divisor."""
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def remainder(x: float, y: float) -> float:
    if y == 0 or math.isinf(x):
        return math.nan
    return math.fmod(x, y)


def floor(x: float) -> float:
    if not math.isfinite(x) or x == 0:
        return x
    return float(math.floor(x))
