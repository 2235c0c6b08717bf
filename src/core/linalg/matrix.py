"""
Matrix — матрица фиксированной формы

Matrix[T, R, C] — R*C элементов типа T с адресацией (row, column).
Построение из плоского списка — row-major: первые C значений заполняют
строку 0, следующие C — строку 1 и т.д.

Операторы:
    -m              поэлементное отрицание
    m + n, m - n    поэлементно, только для одинаковых (R, C) и T
    s * m, m * s    масштабирование, коммутативно

Умножение matrix * matrix, matrix * vector и vector * matrix
НЕ поддерживается: UnsupportedOperationError.
"""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, ClassVar, Optional

from src.core.linalg.errors import ElementIndexError, ShapeMismatchError
from src.core.linalg.fixed_storage import (
    FixedStorage,
    element_index,
    make_sized_class,
    validate_type_parameters,
)
from src.core.linalg.kinds import OperandKind
from src.core.linalg.rendering import render_matrix
from src.core.linalg.settings import DEFAULT_SETTINGS, LinalgSettings

# Кэш sized-классов: один класс на тройку (T, R, C)
_SIZED_MATRICES: dict[tuple[type, int, int], type] = {}


class Matrix(FixedStorage):
    """
    Матрица фиксированной формы.

    Неразмеченный Matrix не инстанцируется; используйте Matrix[T, R, C].
    """

    __slots__ = ()

    operand_kind: ClassVar[OperandKind] = OperandKind.MATRIX
    ROWS: ClassVar[Optional[int]] = None
    COLUMNS: ClassVar[Optional[int]] = None

    def __class_getitem__(cls, params: Any) -> type:
        if cls.SHAPE is not None:
            raise TypeError(f"{cls.__name__} is already sized")
        if not isinstance(params, tuple) or len(params) != 3:
            raise TypeError(
                "Matrix[...] expects three parameters: element type, rows, columns"
            )
        element_type, rows, columns = params
        return fixed_matrix(element_type, rows, columns)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> "Matrix":
        """
        Построение из вложенных строк.

        Args:
            rows: Ровно ROWS строк по COLUMNS элементов

        Raises:
            ShapeMismatchError: Если число строк или длина строки не совпадает

        Examples:
            >>> Matrix[int, 2, 2].from_rows([[1, 2], [3, 4]])
            Matrix[int, 2, 2](1, 2, 3, 4)
        """
        if cls.SHAPE is None:
            raise TypeError(f"{cls.__name__} is not sized")

        rows = list(rows)
        if len(rows) != cls.ROWS:
            raise ShapeMismatchError(
                f"{cls.__name__} expects {cls.ROWS} rows, got {len(rows)}"
            )

        flat: list[Any] = []
        for i, row in enumerate(rows):
            if len(row) != cls.COLUMNS:
                raise ShapeMismatchError(
                    f"{cls.__name__} row {i} has {len(row)} elements, expected {cls.COLUMNS}"
                )
            flat.extend(row)
        return cls(*flat)

    def rows(self) -> int:
        """Число строк R."""
        return type(self).ROWS

    def columns(self) -> int:
        """Число столбцов C."""
        return type(self).COLUMNS

    @property
    def shape(self) -> tuple[int, int]:
        return type(self).SHAPE

    def __getitem__(self, key: tuple[int, int]) -> Any:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Matrix indices must be a (row, column) pair")

        i, j = element_index(key[0]), element_index(key[1])
        rows, columns = type(self).SHAPE
        if not 0 <= i < rows:
            raise ElementIndexError(f"Matrix row {i} out of range [0, {rows})")
        if not 0 <= j < columns:
            raise ElementIndexError(f"Matrix column {j} out of range [0, {columns})")
        return self._elements[i * columns + j]

    def iter_rows(self) -> Iterator[tuple[Any, ...]]:
        """Строки по порядку, каждая — кортеж из COLUMNS элементов."""
        columns = type(self).COLUMNS
        for start in range(0, len(self._elements), columns):
            yield self._elements[start:start + columns]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(e) for e in self._elements)})"

    def __str__(self) -> str:
        return render_matrix(self)

    def __reduce__(self) -> tuple:
        cls = type(self)
        return (_rebuild_matrix, (cls.element_type, cls.ROWS, cls.COLUMNS, self._elements))


def fixed_matrix(
    element_type: type,
    rows: int,
    columns: int,
    settings: Optional[LinalgSettings] = None,
) -> type:
    """
    Sized-класс матрицы Matrix[element_type, rows, columns].

    Повторный вызов с теми же параметрами возвращает тот же класс.

    Raises:
        TypeError: Если параметры не тип/не int
        ValueError: Если размерность вне допустимого диапазона
    """
    validate_type_parameters(element_type, (rows, columns), settings or DEFAULT_SETTINGS)

    key = (element_type, rows, columns)
    sized = _SIZED_MATRICES.get(key)
    if sized is None:
        sized = make_sized_class(
            Matrix,
            f"Matrix[{element_type.__name__}, {rows}, {columns}]",
            element_type,
            (rows, columns),
            {"ROWS": rows, "COLUMNS": columns},
        )
        sized = _SIZED_MATRICES.setdefault(key, sized)
    return sized


def imat(rows: int, columns: int) -> type:
    """Целочисленная матрица: imat(2, 3) is Matrix[int, 2, 3]."""
    return fixed_matrix(int, rows, columns)


def _rebuild_matrix(element_type: type, rows: int, columns: int, elements: tuple) -> Matrix:
    return fixed_matrix(element_type, rows, columns)._from_trusted(elements)
