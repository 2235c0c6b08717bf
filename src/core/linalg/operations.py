"""
Operations — диспетчеризация операторов по паре видов операндов

Одна и та же инфиксная операция (например *) выполняет разные алгоритмы
в зависимости от пары видов операндов. Правила хранятся в закрытом реестре,
ключ — (operator, lhs kind, rhs kind). Комбинации без правила отклоняются
с UnsupportedOperationError; обобщённого fallback нет.

Порядок правил (приоритет при чтении):
1. NEG на vector/matrix — поэлементно, вид сохраняется
2. ADD/SUB на (vector, vector), (matrix, matrix) — поэлементно, формы равны
3. MUL (vector, vector) — скалярное произведение, результат scalar
4. MUL (scalar, vector|matrix) и (vector|matrix, scalar) — масштабирование
5. Всё остальное (matrix*matrix, matrix*vector, ...) — не поддерживается

Разрешение операции (resolve_operation) работает только с сигнатурами,
поэтому несовместимость форм обнаруживается до чтения любого элемента,
а также без экземпляров — прямо на sized-классах.
"""

import logging
import operator as _op
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from src.core.linalg.errors import (
    ElementTypeMismatchError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from src.core.linalg.kinds import (
    OperandKind,
    OperandSignature,
    coerce_element,
    signature_of,
)

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    """Поддерживаемые операторы."""

    NEG = "neg"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def is_unary(self) -> bool:
        return self is Operator.NEG


_SYMBOLS = {
    Operator.NEG: "-",
    Operator.ADD: "+",
    Operator.SUB: "-",
    Operator.MUL: "*",
}


# Статическая проверка: (lhs, rhs) -> сигнатура результата
SignatureCheck = Callable[[OperandSignature, Optional[OperandSignature]], OperandSignature]

# Вычисление: (lhs, rhs, сигнатура результата) -> новое значение
Evaluator = Callable[[Any, Any, OperandSignature], Any]


@dataclass(frozen=True)
class OperationRule:
    """
    Одно правило реестра.

    Attributes:
        name: Имя алгоритма (для логов и сообщений)
        operator: Оператор
        lhs_kind: Вид левого операнда
        rhs_kind: Вид правого операнда (None для унарных)
        check: Статическая проверка сигнатур
        evaluate: Вычисление результата
    """

    name: str
    operator: Operator
    lhs_kind: OperandKind
    rhs_kind: Optional[OperandKind]
    check: SignatureCheck
    evaluate: Evaluator


@dataclass(frozen=True)
class Resolution:
    """Результат разрешения: выбранное правило и сигнатура результата."""

    rule: OperationRule
    result: OperandSignature


_RegistryKey = tuple[Operator, OperandKind, Optional[OperandKind]]

_RULES: dict[_RegistryKey, OperationRule] = {}


def _register(rule: OperationRule) -> None:
    key = (rule.operator, rule.lhs_kind, rule.rhs_kind)
    if key in _RULES:
        raise RuntimeError(f"Duplicate operation rule for {key}")
    _RULES[key] = rule


def registered_rules() -> tuple[OperationRule, ...]:
    """Все зарегистрированные правила в порядке регистрации."""
    return tuple(_RULES.values())


# =============================================================================
# СТАТИЧЕСКИЕ ПРОВЕРКИ
# =============================================================================


def _describe_pair(
    op: Operator, lhs: OperandSignature, rhs: Optional[OperandSignature]
) -> str:
    if rhs is None:
        return f"{op.symbol}{lhs.describe()}"
    return f"{lhs.describe()} {op.symbol} {rhs.describe()}"


def _check_kind_preserving(
    lhs: OperandSignature, rhs: Optional[OperandSignature]
) -> OperandSignature:
    return lhs


def _require_same_shape(
    op: Operator, lhs: OperandSignature, rhs: OperandSignature
) -> None:
    if lhs.shape != rhs.shape:
        raise ShapeMismatchError(
            f"Shape mismatch in {_describe_pair(op, lhs, rhs)}: "
            f"{lhs.shape} vs {rhs.shape}"
        )
    if lhs.element_type is not rhs.element_type:
        raise ElementTypeMismatchError(
            f"Element type mismatch in {_describe_pair(op, lhs, rhs)}"
        )


def _check_elementwise(op: Operator) -> SignatureCheck:
    def check(lhs: OperandSignature, rhs: Optional[OperandSignature]) -> OperandSignature:
        _require_same_shape(op, lhs, rhs)
        return lhs

    return check


def _check_inner_product(
    lhs: OperandSignature, rhs: Optional[OperandSignature]
) -> OperandSignature:
    _require_same_shape(Operator.MUL, lhs, rhs)
    return OperandSignature(kind=OperandKind.SCALAR, element_type=lhs.element_type, shape=())


def _check_scale_left(
    lhs: OperandSignature, rhs: Optional[OperandSignature]
) -> OperandSignature:
    return rhs


def _check_scale_right(
    lhs: OperandSignature, rhs: Optional[OperandSignature]
) -> OperandSignature:
    return lhs


# =============================================================================
# АЛГОРИТМЫ
# =============================================================================


def _negate(operand: Any, _unused: Any, result: OperandSignature) -> Any:
    return type(operand)._from_trusted(tuple(-e for e in operand.elements))


def _elementwise(fn: Callable[[Any, Any], Any]) -> Evaluator:
    def evaluate(lhs: Any, rhs: Any, result: OperandSignature) -> Any:
        return type(lhs)._from_trusted(
            tuple(fn(a, b) for a, b in zip(lhs.elements, rhs.elements))
        )

    return evaluate


def _inner_product(lhs: Any, rhs: Any, result: OperandSignature) -> Any:
    total = sum(
        (a * b for a, b in zip(lhs.elements, rhs.elements)),
        start=result.element_type(),
    )
    return result.element_type(total)


def _scale_left(scalar: Any, operand: Any, result: OperandSignature) -> Any:
    s = coerce_element(result.element_type, scalar)
    return type(operand)._from_trusted(tuple(s * e for e in operand.elements))


def _scale_right(operand: Any, scalar: Any, result: OperandSignature) -> Any:
    s = coerce_element(result.element_type, scalar)
    return type(operand)._from_trusted(tuple(e * s for e in operand.elements))


# =============================================================================
# РЕЕСТР ПРАВИЛ
# =============================================================================

# 1. Унарное отрицание
for _kind in (OperandKind.VECTOR, OperandKind.MATRIX):
    _register(
        OperationRule(
            name=f"{_kind.value}_negation",
            operator=Operator.NEG,
            lhs_kind=_kind,
            rhs_kind=None,
            check=_check_kind_preserving,
            evaluate=_negate,
        )
    )

# 2. Поэлементные сложение и вычитание одной формы
for _kind in (OperandKind.VECTOR, OperandKind.MATRIX):
    for _operator, _fn in ((Operator.ADD, _op.add), (Operator.SUB, _op.sub)):
        _register(
            OperationRule(
                name=f"{_kind.value}_{_operator.value}",
                operator=_operator,
                lhs_kind=_kind,
                rhs_kind=_kind,
                check=_check_elementwise(_operator),
                evaluate=_elementwise(_fn),
            )
        )

# 3. vector * vector — скалярное произведение (поэлементного умножения нет)
_register(
    OperationRule(
        name="inner_product",
        operator=Operator.MUL,
        lhs_kind=OperandKind.VECTOR,
        rhs_kind=OperandKind.VECTOR,
        check=_check_inner_product,
        evaluate=_inner_product,
    )
)

# 4. Масштабирование в обоих порядках операндов
for _kind in (OperandKind.VECTOR, OperandKind.MATRIX):
    _register(
        OperationRule(
            name=f"scalar_{_kind.value}_scale",
            operator=Operator.MUL,
            lhs_kind=OperandKind.SCALAR,
            rhs_kind=_kind,
            check=_check_scale_left,
            evaluate=_scale_left,
        )
    )
    _register(
        OperationRule(
            name=f"{_kind.value}_scalar_scale",
            operator=Operator.MUL,
            lhs_kind=_kind,
            rhs_kind=OperandKind.SCALAR,
            check=_check_scale_right,
            evaluate=_scale_right,
        )
    )


# =============================================================================
# РАЗРЕШЕНИЕ И ПРИМЕНЕНИЕ
# =============================================================================


def resolve_operation(
    op: Operator,
    lhs: OperandSignature,
    rhs: Optional[OperandSignature] = None,
) -> Resolution:
    """
    Выбор правила и вычисление сигнатуры результата без доступа к элементам.

    Args:
        op: Оператор
        lhs: Сигнатура левого (единственного для NEG) операнда
        rhs: Сигнатура правого операнда (None для унарных)

    Returns:
        Resolution с правилом и сигнатурой результата

    Raises:
        UnsupportedOperationError: Если для пары видов нет правила
        ShapeMismatchError: Если формы несовместимы
        ElementTypeMismatchError: Если типы элементов различаются

    Examples:
        >>> from src.core.linalg import Vector
        >>> sig = signature_of(Vector[int, 3])
        >>> resolve_operation(Operator.MUL, sig, sig).result.kind
        <OperandKind.SCALAR: 'scalar'>
    """
    if op.is_unary != (rhs is None):
        raise ValueError(f"Operator {op.value} arity does not match the operands given")

    rule = _RULES.get((op, lhs.kind, rhs.kind if rhs is not None else None))
    if rule is None:
        logger.debug("No rule for %s", _describe_pair(op, lhs, rhs))
        raise UnsupportedOperationError(
            f"Unsupported operation: {_describe_pair(op, lhs, rhs)}"
        )

    try:
        result = rule.check(lhs, rhs)
    except (ShapeMismatchError, ElementTypeMismatchError) as e:
        logger.debug("Rule %s rejected operands: %s", rule.name, e)
        raise

    return Resolution(rule=rule, result=result)


def check_operation(op: Operator, lhs: Any, rhs: Any = None) -> OperandSignature:
    """
    Статическая проверка на классах или значениях.

    Args:
        op: Оператор
        lhs: Sized-класс, значение или числовой тип
        rhs: То же для правого операнда (None для унарных)

    Returns:
        Сигнатура результата

    Examples:
        >>> from src.core.linalg import Vector
        >>> check_operation(Operator.ADD, Vector[int, 3], Vector[int, 4])  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ShapeMismatchError: ...
    """
    rhs_sig = signature_of(rhs) if rhs is not None else None
    return resolve_operation(op, signature_of(lhs), rhs_sig).result


def apply_unary(op: Operator, operand: Any) -> Any:
    """
    Применение унарного оператора.

    Returns:
        Новое значение того же вида и формы
    """
    resolution = resolve_operation(op, signature_of(operand))
    return resolution.rule.evaluate(operand, None, resolution.result)


def apply_binary(op: Operator, lhs: Any, rhs: Any) -> Any:
    """
    Применение бинарного оператора.

    Операнды не изменяются; результат — новое значение
    (или скаляр для скалярного произведения).

    Raises:
        TypeError: Если один из операндов не vector/matrix/scalar
        UnsupportedOperationError, ShapeMismatchError,
        ElementTypeMismatchError: см. resolve_operation
    """
    resolution = resolve_operation(op, signature_of(lhs), signature_of(rhs))
    return resolution.rule.evaluate(lhs, rhs, resolution.result)
