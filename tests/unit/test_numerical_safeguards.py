"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf проверки (real и complex)
2. Epsilon-сравнения скаляров разных типов
3. Поэлементное сравнение последовательностей
4. Валидацию параметров
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    all_close,
    is_close,
    is_valid_float,
    is_zero,
    validate_non_negative,
    validate_positive,
)

# =============================================================================
# ТЕСТЫ NaN/Inf
# =============================================================================


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_normal_values_valid(self) -> None:
        """Обычные значения валидны"""
        assert is_valid_float(0.0)
        assert is_valid_float(1.0)
        assert is_valid_float(-1e-10)
        assert is_valid_float(3)

    def test_nan_invalid(self) -> None:
        """NaN невалиден"""
        assert not is_valid_float(float("nan"))

    def test_inf_invalid(self) -> None:
        """Inf невалиден"""
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    def test_complex(self) -> None:
        """Для complex проверяются обе компоненты"""
        assert is_valid_float(1 + 2j)
        assert not is_valid_float(complex(1, float("inf")))


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestIsClose:
    """Тесты для is_close"""

    def test_default_tolerances(self) -> None:
        """Значения по умолчанию"""
        assert EPS_FLOAT_COMPARE_REL == 1e-9
        assert EPS_FLOAT_COMPARE_ABS == 1e-12

    def test_close_floats(self) -> None:
        """Близкие float"""
        assert is_close(1.0, 1.0 + 1e-10)
        assert is_close(0.0, 1e-13)
        assert is_close(1e10, 1e10 + 1.0)

    def test_distant_floats(self) -> None:
        """Далёкие float"""
        assert not is_close(1.0, 1.1)
        assert not is_close(0.0, 1e-6)

    def test_rationals_compared_exactly(self) -> None:
        """int и Fraction сравниваются точно, без толерантности"""
        assert is_close(3, 3)
        assert is_close(Fraction(1, 3), Fraction(2, 6))
        assert not is_close(10**20, 10**20 + 1)

    def test_complex(self) -> None:
        """complex сравнивается по модулю разности"""
        assert is_close(1 + 1j, 1 + 1j + 1e-13)
        assert not is_close(1 + 1j, 1 - 1j)
        assert is_close(2, 2 + 0j)

    def test_decimal(self) -> None:
        """Decimal приводится к float"""
        assert is_close(Decimal("0.1"), 0.1)
        assert not is_close(Decimal("0.1"), 0.2)

    def test_custom_tolerance(self) -> None:
        """Пользовательская толерантность"""
        assert not is_close(1.0, 1.001)
        assert is_close(1.0, 1.001, rel_tol=1e-2)


class TestIsZero:
    """Тесты для is_zero"""

    def test_zero(self) -> None:
        """Ноль и малые значения"""
        assert is_zero(0.0)
        assert is_zero(1e-13)
        assert is_zero(-1e-13)
        assert is_zero(0)

    def test_non_zero(self) -> None:
        """Значения больше толерантности"""
        assert not is_zero(1e-6)
        assert is_zero(1e-6, tol=1e-5)


class TestAllClose:
    """Тесты для all_close"""

    def test_equal_sequences(self) -> None:
        """Поэлементно близкие последовательности"""
        assert all_close([0.1 + 0.2, 1.0], [0.3, 1.0])

    def test_one_element_differs(self) -> None:
        """Один далёкий элемент — не близки"""
        assert not all_close([0.3, 1.0], [0.3, 1.1])

    def test_length_mismatch(self) -> None:
        """Разная длина — не близки"""
        assert not all_close([1.0], [1.0, 1.0])


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_positive / validate_non_negative"""

    def test_validate_positive(self) -> None:
        """Положительные значения проходят"""
        validate_positive(1e-9, "rel_tol")
        with pytest.raises(ValueError, match="rel_tol must be positive"):
            validate_positive(0.0, "rel_tol")
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_positive(float("nan"), "rel_tol")

    def test_validate_non_negative(self) -> None:
        """Ноль допустим, отрицательные — нет"""
        validate_non_negative(0.0, "abs_tol")
        with pytest.raises(ValueError, match="abs_tol must be non-negative"):
            validate_non_negative(-1.0, "abs_tol")
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_non_negative(float("inf"), "abs_tol")
