"""
Vector — вектор фиксированной длины

Vector[T, N] — упорядоченная последовательность из ровно N элементов типа T.
N задаётся параметром класса и не меняется за время жизни значения.

Операторы:
    -v              поэлементное отрицание
    v + w, v - w    поэлементно, только для одинаковых N и T
    v * w           скалярное произведение (результат — скаляр типа T)
    s * v, v * s    масштабирование, коммутативно

Examples:
    >>> v = Vector[int, 3](5, 2, 3)
    >>> w = Vector[int, 3](1, 2, 5)
    >>> v * w
    24
    >>> print(4 * v)
    (20, 8, 12)
"""

from typing import Any, ClassVar, Optional

from src.core.linalg.errors import ElementIndexError
from src.core.linalg.fixed_storage import (
    FixedStorage,
    element_index,
    make_sized_class,
    validate_type_parameters,
)
from src.core.linalg.kinds import OperandKind
from src.core.linalg.rendering import render_vector
from src.core.linalg.settings import DEFAULT_SETTINGS, LinalgSettings

# Кэш sized-классов: один класс на пару (T, N)
_SIZED_VECTORS: dict[tuple[type, int], type] = {}


class Vector(FixedStorage):
    """
    Вектор фиксированной длины.

    Неразмеченный Vector не инстанцируется; используйте Vector[T, N].
    Значения immutable, все операторы возвращают новые значения.
    """

    __slots__ = ()

    operand_kind: ClassVar[OperandKind] = OperandKind.VECTOR
    SIZE: ClassVar[Optional[int]] = None

    def __class_getitem__(cls, params: Any) -> type:
        if cls.SHAPE is not None:
            raise TypeError(f"{cls.__name__} is already sized")
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError("Vector[...] expects two parameters: element type and size")
        element_type, size = params
        return fixed_vector(element_type, size)

    def size(self) -> int:
        """Длина вектора N."""
        return type(self).SIZE

    def __getitem__(self, index: int) -> Any:
        i = element_index(index)
        size = type(self).SIZE
        if not 0 <= i < size:
            raise ElementIndexError(f"Vector index {i} out of range [0, {size})")
        return self._elements[i]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(e) for e in self._elements)})"

    def __str__(self) -> str:
        return render_vector(self)

    def __reduce__(self) -> tuple:
        return (_rebuild_vector, (type(self).element_type, type(self).SIZE, self._elements))


def fixed_vector(
    element_type: type,
    size: int,
    settings: Optional[LinalgSettings] = None,
) -> type:
    """
    Sized-класс вектора Vector[element_type, size].

    Повторный вызов с теми же параметрами возвращает тот же класс.

    Args:
        element_type: Числовой тип элементов (int, float, Fraction, ...)
        size: Длина N >= 1
        settings: Настройки (ограничение max_dimension)

    Returns:
        Подкласс Vector

    Raises:
        TypeError: Если параметры не тип/не int
        ValueError: Если size вне допустимого диапазона
    """
    validate_type_parameters(element_type, (size,), settings or DEFAULT_SETTINGS)

    key = (element_type, size)
    sized = _SIZED_VECTORS.get(key)
    if sized is None:
        sized = make_sized_class(
            Vector,
            f"Vector[{element_type.__name__}, {size}]",
            element_type,
            (size,),
            {"SIZE": size},
        )
        sized = _SIZED_VECTORS.setdefault(key, sized)
    return sized


def ivec(size: int) -> type:
    """Целочисленный вектор: ivec(3) is Vector[int, 3]."""
    return fixed_vector(int, size)


def _rebuild_vector(element_type: type, size: int, elements: tuple) -> Vector:
    return fixed_vector(element_type, size)._from_trusted(elements)
