"""
Core math modules

Численные примитивы: толерантности и устойчивые сравнения скаляров.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf checks
    is_valid_float,
    # Epsilon comparisons
    all_close,
    is_close,
    is_zero,
    # Validation
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # NaN/Inf checks
    "is_valid_float",
    # Epsilon comparisons
    "all_close",
    "is_close",
    "is_zero",
    # Validation
    "validate_non_negative",
    "validate_positive",
]
