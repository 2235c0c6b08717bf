"""
Core linalg — векторы и матрицы фиксированного размера

Значимые типы с арифметикой, проверкой совместимости форм до обращения
к элементам и диспетчеризацией операторов по паре видов операндов.
"""

import logging

# Errors
from src.core.linalg.errors import (
    ElementIndexError,
    ElementTypeMismatchError,
    LinalgError,
    ShapeMismatchError,
    UnsupportedOperationError,
)

# Operand kinds & dispatch
from src.core.linalg.kinds import (
    OperandKind,
    OperandSignature,
    coerce_element,
    kind_of,
    signature_of,
)
from src.core.linalg.operations import (
    OperationRule,
    Operator,
    Resolution,
    apply_binary,
    apply_unary,
    check_operation,
    registered_rules,
    resolve_operation,
)

# Settings
from src.core.linalg.settings import (
    DEFAULT_SETTINGS,
    MAX_DIMENSION_DEFAULT,
    LinalgSettings,
)

# Value types
from src.core.linalg.matrix import Matrix, fixed_matrix, imat
from src.core.linalg.vector import Vector, fixed_vector, ivec

# Rendering
from src.core.linalg.rendering import render, render_matrix, render_vector

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    "LinalgError",
    "ShapeMismatchError",
    "ElementTypeMismatchError",
    "UnsupportedOperationError",
    "ElementIndexError",
    # Operand kinds
    "OperandKind",
    "OperandSignature",
    "coerce_element",
    "kind_of",
    "signature_of",
    # Dispatch
    "Operator",
    "OperationRule",
    "Resolution",
    "apply_binary",
    "apply_unary",
    "check_operation",
    "registered_rules",
    "resolve_operation",
    # Settings
    "DEFAULT_SETTINGS",
    "MAX_DIMENSION_DEFAULT",
    "LinalgSettings",
    # Value types
    "Vector",
    "fixed_vector",
    "ivec",
    "Matrix",
    "fixed_matrix",
    "imat",
    # Rendering
    "render",
    "render_matrix",
    "render_vector",
]
