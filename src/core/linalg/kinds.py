"""
Operand Kinds — классификация операндов для диспетчеризации операторов

Вид операнда (vector / matrix / scalar) не зависит от типа элементов.
Сигнатура операнда = вид + тип элементов + форма. Сигнатуру можно получить
как из значения, так и из sized-класса (Vector[int, 3]), поэтому проверка
совместимости выполняется без создания экземпляров.
"""

from dataclasses import dataclass
from enum import Enum
from numbers import Number
from typing import Any, Optional

from src.core.linalg.errors import ElementTypeMismatchError


class OperandKind(str, Enum):
    """Структурная категория операнда."""

    VECTOR = "vector"
    MATRIX = "matrix"
    SCALAR = "scalar"


@dataclass(frozen=True)
class OperandSignature:
    """
    Статическое описание операнда.

    Attributes:
        kind: Вид операнда
        element_type: Тип элементов (для скаляра — его собственный тип)
        shape: (N,) для вектора, (R, C) для матрицы, () для скаляра
    """

    kind: OperandKind
    element_type: type
    shape: tuple[int, ...]

    def describe(self) -> str:
        """Краткое описание для сообщений об ошибках: vector[int, 3]."""
        if self.kind is OperandKind.SCALAR:
            return f"scalar[{self.element_type.__name__}]"
        dims = ", ".join(str(d) for d in self.shape)
        return f"{self.kind.value}[{self.element_type.__name__}, {dims}]"


def kind_of(value: Any) -> Optional[OperandKind]:
    """
    Вид операнда или None, если значение не участвует в алгебре.

    Sized-классы векторов и матриц объявляют свой вид через атрибут
    класса operand_kind; любой numbers.Number считается скаляром.
    bool скаляром не считается.
    """
    declared = getattr(type(value), "operand_kind", None)
    if declared is not None:
        return declared
    if isinstance(value, Number) and not isinstance(value, bool):
        return OperandKind.SCALAR
    return None


def signature_of(value: Any) -> OperandSignature:
    """
    Сигнатура значения или sized-класса.

    Args:
        value: Вектор, матрица, скаляр или sized-класс вектора/матрицы

    Returns:
        OperandSignature

    Raises:
        TypeError: Если значение не является операндом
                   (или класс не параметризован размерами)
    """
    cls = value if isinstance(value, type) else type(value)

    shape = getattr(cls, "SHAPE", None)
    declared = getattr(cls, "operand_kind", None)
    if declared is not None:
        if shape is None:
            raise TypeError(
                f"{cls.__name__} is not sized; parameterize it first, "
                f"e.g. {cls.__name__}[int, 3]"
            )
        return OperandSignature(kind=declared, element_type=cls.element_type, shape=shape)

    if isinstance(value, type):
        if issubclass(value, Number) and not issubclass(value, bool):
            return OperandSignature(kind=OperandKind.SCALAR, element_type=value, shape=())
        raise TypeError(f"{value.__name__} is not an operand type")

    if kind_of(value) is OperandKind.SCALAR:
        return OperandSignature(kind=OperandKind.SCALAR, element_type=cls, shape=())

    raise TypeError(f"{cls.__name__} is not an operand (expected vector, matrix or scalar)")


def coerce_element(element_type: type, value: Any) -> Any:
    """
    Приведение значения к типу элементов без потери точности.

    Args:
        element_type: Целевой тип (int, float, Fraction, ...)
        value: Исходное значение

    Returns:
        Значение типа element_type, равное исходному

    Raises:
        ElementTypeMismatchError: Если значение не число (или bool),
            или приведение теряет точность (int <- 2.5)

    Examples:
        >>> coerce_element(int, 2.0)
        2
        >>> coerce_element(float, 3)
        3.0
    """
    if type(value) is element_type:
        return value

    if not isinstance(value, Number) or isinstance(value, bool):
        raise ElementTypeMismatchError(
            f"Expected a number convertible to {element_type.__name__}, "
            f"got {type(value).__name__} {value!r}"
        )

    try:
        converted = element_type(value)
    except (TypeError, ValueError, ArithmeticError) as e:
        raise ElementTypeMismatchError(
            f"Cannot convert {value!r} to {element_type.__name__}: {e}"
        ) from e

    if converted != value:
        raise ElementTypeMismatchError(
            f"Lossy conversion of {value!r} to {element_type.__name__} ({converted!r})"
        )

    return converted
