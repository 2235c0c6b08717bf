"""
FixedStorage — общее хранилище для векторов и матриц фиксированного размера

Размерность — константа уровня класса: Vector[int, 3] и Matrix[int, 2, 3]
создают (и кэшируют) sized-подклассы с атрибутами element_type и SHAPE.
Экземпляр хранит только кортеж элементов в row-major порядке.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(elements) == prod(SHAPE) для любого экземпляра
2. Экземпляр immutable: присваивание атрибутов запрещено
3. Каждый элемент — экземпляр element_type (приведение только без потерь)
4. Операторы не изменяют операнды, результат — всегда новое значение
"""

import logging
import math
import operator
from collections.abc import Iterable, Iterator
from numbers import Number
from typing import Any, ClassVar, Optional

from src.core.linalg.errors import ShapeMismatchError
from src.core.linalg.kinds import OperandKind, coerce_element, kind_of
from src.core.linalg.operations import Operator, apply_binary, apply_unary
from src.core.linalg.settings import DEFAULT_SETTINGS, LinalgSettings
from src.core.math.numerical_safeguards import all_close

logger = logging.getLogger(__name__)


# =============================================================================
# ПАРАМЕТРЫ SIZED-КЛАССОВ
# =============================================================================


def validate_type_parameters(
    element_type: Any,
    dims: tuple[Any, ...],
    settings: LinalgSettings = DEFAULT_SETTINGS,
) -> None:
    """
    Проверка параметров sized-класса: тип элементов и размерности.

    Raises:
        TypeError: Если element_type не числовой тип, или размерность не int
        ValueError: Если размерность вне [1, settings.max_dimension]
    """
    if (
        not isinstance(element_type, type)
        or not issubclass(element_type, Number)
        or issubclass(element_type, bool)
    ):
        raise TypeError(f"Element type must be a numeric type, got {element_type!r}")

    for dim in dims:
        if not isinstance(dim, int) or isinstance(dim, bool):
            raise TypeError(f"Dimensions must be int, got {dim!r}")
        if dim < 1 or dim > settings.max_dimension:
            raise ValueError(
                f"Dimension {dim} out of range [1, {settings.max_dimension}]"
            )


def element_index(key: Any) -> int:
    """
    Целочисленный индекс элемента.

    bool отклоняется, как и везде в библиотеке, хотя operator.index его
    принимает.

    Raises:
        TypeError: Если key не целое число или bool
    """
    if isinstance(key, bool):
        raise TypeError(f"Index must be an integer, not bool ({key!r})")
    return operator.index(key)


# =============================================================================
# БАЗОВЫЙ КЛАСС
# =============================================================================


class FixedStorage:
    """
    Базовый класс sized-значений.

    Подклассы (Vector, Matrix) объявляют operand_kind; sized-подклассы
    дополнительно element_type и SHAPE. Неразмеченный класс не
    инстанцируется: динамических размеров нет.
    """

    __slots__ = ("_elements",)

    operand_kind: ClassVar[Optional[OperandKind]] = None
    element_type: ClassVar[Optional[type]] = None
    SHAPE: ClassVar[Optional[tuple[int, ...]]] = None

    def __init__(self, *elements: Any) -> None:
        cls = type(self)
        if cls.SHAPE is None:
            raise TypeError(
                f"{cls.__name__} is not sized; use {cls.__name__}[element_type, ...] first"
            )

        expected = math.prod(cls.SHAPE)
        if len(elements) != expected:
            raise ShapeMismatchError(
                f"{cls.__name__} expects {expected} elements, got {len(elements)}"
            )

        coerced = tuple(coerce_element(cls.element_type, e) for e in elements)
        object.__setattr__(self, "_elements", coerced)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> "FixedStorage":
        """Конструирование из любой итерируемой последовательности (row-major)."""
        return cls(*values)

    @classmethod
    def zero(cls) -> "FixedStorage":
        """Аддитивная единица той же формы: element_type() во всех ячейках."""
        if cls.SHAPE is None:
            raise TypeError(f"{cls.__name__} is not sized")
        return cls._from_trusted((cls.element_type(),) * math.prod(cls.SHAPE))

    @classmethod
    def _from_trusted(cls, elements: tuple[Any, ...]) -> "FixedStorage":
        """
        Конструирование без проверки формы и без проверки потерь.

        Только для результатов арифметики: форма и типы уже проверены
        при разрешении операции. Операторы подкласса T могут вернуть
        базовый тип (Meters + Meters -> float), такие элементы
        оборачиваются в element_type.
        """
        element_type = cls.element_type
        elements = tuple(
            e if type(e) is element_type else element_type(e) for e in elements
        )
        instance = object.__new__(cls)
        object.__setattr__(instance, "_elements", elements)
        return instance

    # -------------------------------------------------------------------------
    # Доступ к данным
    # -------------------------------------------------------------------------

    @property
    def elements(self) -> tuple[Any, ...]:
        """Все элементы в row-major порядке."""
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    # -------------------------------------------------------------------------
    # Immutability
    # -------------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if kind_of(other) is not type(self).operand_kind:
            return NotImplemented
        return type(self).SHAPE == type(other).SHAPE and self._elements == other._elements

    def __hash__(self) -> int:
        return hash((type(self).operand_kind, type(self).SHAPE, self._elements))

    def is_close(self, other: "FixedStorage", settings: Optional[LinalgSettings] = None) -> bool:
        """
        Поэлементное сравнение с толерантностью.

        Args:
            other: Значение того же вида
            settings: Толерантности (default: DEFAULT_SETTINGS)

        Returns:
            True если вид и форма совпадают и все элементы близки
        """
        settings = settings or DEFAULT_SETTINGS
        if kind_of(other) is not type(self).operand_kind:
            return False
        if type(self).SHAPE != type(other).SHAPE:
            return False
        return all_close(
            self._elements,
            other._elements,
            rel_tol=settings.rel_tol,
            abs_tol=settings.abs_tol,
        )

    # -------------------------------------------------------------------------
    # Арифметика (диспетчеризация по виду операндов)
    # -------------------------------------------------------------------------

    def __neg__(self) -> "FixedStorage":
        return apply_unary(Operator.NEG, self)

    def __add__(self, other: Any) -> Any:
        if kind_of(other) is None:
            return NotImplemented
        return apply_binary(Operator.ADD, self, other)

    def __radd__(self, other: Any) -> Any:
        if kind_of(other) is None:
            return NotImplemented
        return apply_binary(Operator.ADD, other, self)

    def __sub__(self, other: Any) -> Any:
        if kind_of(other) is None:
            return NotImplemented
        return apply_binary(Operator.SUB, self, other)

    def __rsub__(self, other: Any) -> Any:
        if kind_of(other) is None:
            return NotImplemented
        return apply_binary(Operator.SUB, other, self)

    def __mul__(self, other: Any) -> Any:
        if kind_of(other) is None:
            return NotImplemented
        return apply_binary(Operator.MUL, self, other)

    def __rmul__(self, other: Any) -> Any:
        if kind_of(other) is None:
            return NotImplemented
        return apply_binary(Operator.MUL, other, self)


def make_sized_class(
    base: type,
    name: str,
    element_type: type,
    shape: tuple[int, ...],
    extra: dict[str, Any],
) -> type:
    """
    Создание sized-подкласса base.

    Args:
        base: Vector или Matrix
        name: Имя класса для repr, например "Vector[int, 3]"
        element_type: Тип элементов
        shape: Форма
        extra: Дополнительные атрибуты класса (SIZE, ROWS, COLUMNS)

    Returns:
        Новый класс (кэширование — на стороне вызывающего)
    """
    namespace = {
        "__slots__": (),
        "__module__": base.__module__,
        "__qualname__": name,
        "element_type": element_type,
        "SHAPE": shape,
        **extra,
    }
    sized = type(name, (base,), namespace)
    logger.debug("Created sized class %s", name)
    return sized
