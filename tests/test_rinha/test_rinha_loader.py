import io
import json
import math

import pytest

from rinha import loader
from rinha import terms as ast
from rinha.errors import MalformedTree
from rinha.interpreter import evaluate
from rinha.values import Number


def loc(start, end):
    return {"start": start, "end": end, "filename": "sum.rinha"}


SUM = {
    "name": "sum.rinha",
    "expression": {
        "kind": "Let",
        "name": {"text": "sum", "location": loc(4, 7)},
        "value": {
            "kind": "Function",
            "parameters": [
                {"text": "sum", "location": loc(14, 17)},
                {"text": "n", "location": loc(19, 20)},
            ],
            "value": {
                "kind": "If",
                "condition": {
                    "kind": "Binary",
                    "lhs": {"kind": "Var", "text": "n", "location": loc(30, 31)},
                    "op": "Eq",
                    "rhs": {"kind": "Int", "value": 0, "location": loc(35, 36)},
                    "location": loc(30, 36),
                },
                "then": {"kind": "Int", "value": 0, "location": loc(40, 41)},
                "otherwise": {
                    "kind": "Binary",
                    "lhs": {"kind": "Var", "text": "n", "location": loc(50, 51)},
                    "op": "Add",
                    "rhs": {
                        "kind": "Call",
                        "callee": {"kind": "Var", "text": "sum", "location": loc(54, 57)},
                        "arguments": [
                            {"kind": "Var", "text": "sum", "location": loc(58, 61)},
                            {
                                "kind": "Binary",
                                "lhs": {"kind": "Var", "text": "n", "location": loc(63, 64)},
                                "op": "Sub",
                                "rhs": {"kind": "Int", "value": 1, "location": loc(67, 68)},
                                "location": loc(63, 68),
                            },
                        ],
                        "location": loc(54, 69),
                    },
                    "location": loc(50, 69),
                },
                "location": loc(27, 71),
            },
            "location": loc(10, 73),
        },
        "next": {
            "kind": "Print",
            "value": {
                "kind": "Call",
                "callee": {"kind": "Var", "text": "sum", "location": loc(81, 84)},
                "arguments": [
                    {"kind": "Var", "text": "sum", "location": loc(85, 88)},
                    {"kind": "Int", "value": 5, "location": loc(90, 91)},
                ],
                "location": loc(81, 92),
            },
            "location": loc(75, 93),
        },
        "location": loc(0, 93),
    },
    "location": loc(0, 93),
}


def test_load_program(capsys):
    file = loader.loads(json.dumps(SUM))
    assert file.name == "sum.rinha"
    assert isinstance(file.expression, ast.Let)
    assert file.expression.name == ast.Parameter("sum", ast.Location(4, 7, "sum.rinha"))
    assert evaluate(file.expression) == Number(15)
    assert capsys.readouterr().out == "15\n"


def test_load_from_stream_and_path(tmp_path):
    path = tmp_path / "sum.json"
    path.write_text(json.dumps(SUM))
    assert loader.load_path(path) == loader.load(io.StringIO(json.dumps(SUM)))


def test_locations_are_preserved():
    file = loader.parse_file(SUM)
    print_term = file.expression.next
    assert print_term.location == ast.Location(75, 93, "sum.rinha")
    assert print_term.value.arguments[1] == ast.Int(5, ast.Location(90, 91, "sum.rinha"))


@pytest.mark.parametrize(
    "expect, obj",
    [
        (ast.Int(3), {"kind": "Int", "value": 3}),
        (ast.Int(3), {"kind": "Int", "value": 3.0}),
        (ast.Str("x"), {"kind": "Str", "value": "x"}),
        (ast.Bool(False), {"kind": "Bool", "value": False}),
        (ast.Var("x"), {"kind": "Var", "text": "x"}),
        (
            ast.Tuple(ast.Int(1), ast.Int(2)),
            {
                "kind": "Tuple",
                "first": {"kind": "Int", "value": 1},
                "second": {"kind": "Int", "value": 2},
            },
        ),
        (
            ast.Second(ast.Var("t")),
            {"kind": "Second", "value": {"kind": "Var", "text": "t"}},
        ),
        (
            ast.First(ast.Var("t")),
            {"kind": "First", "value": {"kind": "Var", "text": "t"}},
        ),
        (
            ast.Binary(ast.Int(1), ast.BinaryOp.GTE, ast.Int(2)),
            {
                "kind": "Binary",
                "lhs": {"kind": "Int", "value": 1},
                "op": "Gte",
                "rhs": {"kind": "Int", "value": 2},
            },
        ),
    ],
)
def test_parse_term(obj, expect):
    assert loader.parse_term(obj) == expect


@pytest.mark.parametrize(
    "obj",
    [
        [],
        {"value": 1},
        {"kind": "Loop", "body": {}},
        {"kind": "Int", "value": "1"},
        {"kind": "Int", "value": 1.5},
        {"kind": "Bool", "value": 1},
        {"kind": "Int", "value": True},
        {"kind": "Int", "value": False},
        {"kind": "If", "condition": {"kind": "Bool", "value": True}},
        {"kind": "Var", "text": "x", "location": {"start": "0"}},
        {
            "kind": "Binary",
            "lhs": {"kind": "Int", "value": 1},
            "op": "Pow",
            "rhs": {"kind": "Int", "value": 2},
        },
        {"kind": "Function", "parameters": ["x"], "value": {"kind": "Int", "value": 1}},
    ],
)
def test_malformed_terms(obj):
    with pytest.raises(MalformedTree):
        loader.parse_term(obj)


def test_huge_integer_literal_evaluates_to_infinity():
    src = '{"name": "big.rinha", "expression": {"kind": "Int", "value": 1%s}}' % ("0" * 400)
    file = loader.loads(src)
    assert file.expression == ast.Int(10**400)
    assert evaluate(file.expression) == Number(math.inf)


def test_malformed_file():
    with pytest.raises(MalformedTree):
        loader.loads('{"name": "empty.rinha"}')
