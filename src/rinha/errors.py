class Fault(Exception):
    """Base class of all conditions that abort the evaluation of a program."""


class TypeMismatch(Fault):
    def __init__(self, expected: str):
        super().__init__(f"not a {expected}")
        self.expected = expected


class UndefinedVariable(Fault):
    def __init__(self, name: str):
        super().__init__(f"cannot find variable {name}")
        self.name = name


class ArityMismatch(Fault):
    def __init__(self, expected: int, got: int):
        super().__init__(f"expected {expected} arguments but instead got {got}")
        self.expected = expected
        self.got = got


class MalformedTree(ValueError):
    def __init__(self, msg: str, node=None):
        super().__init__(msg if node is None else f"{msg}: {node!r}")
        self.node = node
