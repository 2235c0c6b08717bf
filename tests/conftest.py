"""
Общие pytest хуки.

При провале сравнения векторов/матриц выводим их в диагностическом
формате: (0, -1, -2) и {{1, 2}, {3, 4}}.
"""

from src.core.linalg import OperandKind, kind_of, render

_RENDERED_KINDS = (OperandKind.VECTOR, OperandKind.MATRIX)


def pytest_assertrepr_compare(config, op, left, right):
    if op != "==":
        return None
    if kind_of(left) not in _RENDERED_KINDS and kind_of(right) not in _RENDERED_KINDS:
        return None
    return [
        f"{render(left)} == {render(right)}",
        f"  left:  {left!r}",
        f"  right: {right!r}",
    ]
