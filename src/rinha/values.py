from __future__ import annotations

import dataclasses
import decimal
import math
from typing import TypeAlias

from rinha import terms as ast
from rinha.environment import Env
from rinha.errors import TypeMismatch


@dataclasses.dataclass(frozen=True)
class Boolean:
    val: bool


@dataclasses.dataclass(frozen=True)
class String:
    val: str


@dataclasses.dataclass(frozen=True)
class Number:
    val: float


@dataclasses.dataclass(frozen=True, eq=False)
class Closure:
    parameters: tuple[str, ...]
    body: ast.Term
    captured_env: Env = dataclasses.field(repr=False)


@dataclasses.dataclass(frozen=True)
class Tuple:
    first: Value
    second: Value


Value: TypeAlias = Boolean | String | Number | Closure | Tuple


def as_number(value: Value) -> float:
    match value:
        case Number(val):
            return val
        case _:
            raise TypeMismatch("number")


def as_tuple(value: Value) -> tuple[Value, Value]:
    match value:
        case Tuple(fst, snd):
            return fst, snd
        case _:
            raise TypeMismatch("tuple")


def as_closure(value: Value) -> Closure:
    match value:
        case Closure():
            return value
        case _:
            raise TypeMismatch("closure")


def as_boolean(value: Value) -> bool:
    match value:
        case Boolean(val):
            return val
        case _:
            raise TypeMismatch("boolean")


def as_text(value: Value) -> str:
    """Textual form used when `+` concatenates."""
    match value:
        case Number(val):
            return show_number(val)
        case String(val):
            return val
        case _:
            raise TypeMismatch("string or number")


def show_number(num: float) -> str:
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "inf" if num > 0 else "-inf"
    # shortest round-trip digits, never in exponent notation
    text = format(decimal.Decimal(repr(num)), "f")
    return text.removesuffix(".0")


def to_number(val: int) -> float:
    """Convert an integer literal, saturating to infinity like an f64 parse."""
    try:
        return float(val)
    except OverflowError:
        return math.inf if val > 0 else -math.inf


def show(value: Value) -> str:
    match value:
        case Number(val):
            return show_number(val)
        case Boolean(val):
            return "true" if val else "false"
        case String(val):
            return val
        case Closure():
            return "<#closure>"
        case Tuple(fst, snd):
            return f"({show(fst)}, {show(snd)})"
        case _:
            raise NotImplementedError(value)
