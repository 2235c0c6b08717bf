"""
LinalgSettings — конфигурация библиотеки векторов и матриц

Immutable Pydantic модель. Настройки передаются явно (параметр settings=...),
глобального изменяемого состояния нет. DEFAULT_SETTINGS используется,
когда параметр не передан.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    validate_non_negative,
    validate_positive,
)

# Верхняя граница для N, R, C при параметризации sized-классов.
# Защищает от случайных опечаток вида Vector[int, 10**9].
MAX_DIMENSION_DEFAULT: Final[int] = 4096


class LinalgSettings(BaseModel):
    """
    Настройки сравнения и параметризации.

    Attributes:
        rel_tol: Относительная толерантность для is_close
        abs_tol: Абсолютная толерантность для is_close
        max_dimension: Максимально допустимая размерность (N, R или C)
    """

    rel_tol: float = Field(
        default=EPS_FLOAT_COMPARE_REL, gt=0, description="Относительная толерантность"
    )
    abs_tol: float = Field(
        default=EPS_FLOAT_COMPARE_ABS, ge=0, description="Абсолютная толерантность"
    )
    max_dimension: int = Field(
        default=MAX_DIMENSION_DEFAULT, ge=1, description="Максимальная размерность"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("rel_tol")
    @classmethod
    def validate_rel_tol_finite(cls, v: float) -> float:
        """Inf проходит gt=0, но бессмысленен как толерантность."""
        validate_positive(v, "rel_tol")
        return v

    @field_validator("abs_tol")
    @classmethod
    def validate_abs_tol_finite(cls, v: float) -> float:
        validate_non_negative(v, "abs_tol")
        return v

    @model_validator(mode="after")
    def validate_tolerances(self) -> "LinalgSettings":
        """rel_tol >= 1 делает любые два числа одного знака «близкими»."""
        if self.rel_tol >= 1.0:
            raise ValueError(f"rel_tol {self.rel_tol} must be < 1.0")
        return self


DEFAULT_SETTINGS: Final[LinalgSettings] = LinalgSettings()
