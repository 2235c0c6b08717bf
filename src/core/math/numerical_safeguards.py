"""
Numerical Safeguards — толерантности для сравнения элементов

Модуль обеспечивает устойчивые сравнения скалярных элементов векторов и матриц:
- Проверка валидности float (не NaN, не Inf)
- Epsilon-сравнения с учётом машинной точности (real и complex)
- Поэлементное сравнение последовательностей одинаковой длины
- Валидация параметров толерантности

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сравнения float всегда учитывают машинную точность
2. Точные типы (int, Fraction) сравниваются без потери точности
3. Все операции детерминированы и не изменяют входные данные
"""

import cmath
import math
from collections.abc import Sequence
from numbers import Complex, Number, Rational
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
# Используется в is_close для относительных сравнений
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
# Используется в is_close для абсолютных сравнений
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Для complex проверяются обе компоненты.

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    if isinstance(value, complex):
        return cmath.isfinite(value)
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: Number,
    b: Number,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение скаляров с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Rational значения (int, Fraction) сравниваются точно: для них
    толерантность не нужна и только маскировала бы ошибки.

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: 1e-9)
        abs_tol: Абсолютная толерантность (default: 1e-12)

    Returns:
        True если значения близки с учётом толерантности

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
        >>> is_close(3, 3)
        True
        >>> is_close(1 + 1j, 1 + 1j + 1e-13)
        True
    """
    if isinstance(a, Rational) and isinstance(b, Rational):
        return a == b

    if isinstance(a, complex) or isinstance(b, complex):
        return cmath.isclose(complex(a), complex(b), rel_tol=rel_tol, abs_tol=abs_tol)

    if not isinstance(a, Complex) or not isinstance(b, Complex):
        # Decimal не регистрируется как Complex, но приводится к float
        return math.isclose(float(a), float(b), rel_tol=rel_tol, abs_tol=abs_tol)

    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: Number, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.

    Args:
        value: Проверяемое значение
        tol: Абсолютная толерантность (default: EPS_FLOAT_COMPARE_ABS)

    Returns:
        True если abs(value) <= tol
    """
    return abs(value) <= tol


def all_close(
    a: Sequence[Number],
    b: Sequence[Number],
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Поэлементное сравнение двух последовательностей.

    Последовательности разной длины никогда не близки.

    Args:
        a: Первая последовательность
        b: Вторая последовательность
        rel_tol: Относительная толерантность
        abs_tol: Абсолютная толерантность

    Returns:
        True если длины совпадают и все пары элементов близки
    """
    if len(a) != len(b):
        return False
    return all(is_close(x, y, rel_tol=rel_tol, abs_tol=abs_tol) for x, y in zip(a, b))


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение строго положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
