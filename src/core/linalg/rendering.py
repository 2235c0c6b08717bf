"""
Rendering — текстовое представление значений для диагностики

Формат:
    vector: (e0, e1, ..., eN-1)
    matrix: {{r0c0, r0c1}, {r1c0, r1c1}}
    scalar: str(value)
"""

from typing import Any

from src.core.linalg.kinds import OperandKind, kind_of


def render_vector(vector: Any) -> str:
    """
    Examples:
        >>> render_vector(Vector[int, 3](0, -1, -2))  # doctest: +SKIP
        '(0, -1, -2)'
    """
    return "(" + ", ".join(str(e) for e in vector.elements) + ")"


def render_matrix(matrix: Any) -> str:
    """
    Examples:
        >>> render_matrix(Matrix[int, 2, 2](1, 2, 3, 4))  # doctest: +SKIP
        '{{1, 2}, {3, 4}}'
    """
    rows = ("{" + ", ".join(str(e) for e in row) + "}" for row in matrix.iter_rows())
    return "{" + ", ".join(rows) + "}"


def render(value: Any) -> str:
    """Представление любого операнда; прочие значения — через repr."""
    kind = kind_of(value)
    if kind is OperandKind.VECTOR:
        return render_vector(value)
    if kind is OperandKind.MATRIX:
        return render_matrix(value)
    if kind is OperandKind.SCALAR:
        return str(value)
    return repr(value)
