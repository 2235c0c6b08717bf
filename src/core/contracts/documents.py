"""
Value Documents — JSON-представление векторов и матриц

Immutable Pydantic модели документов и конвертеры значение <-> документ.
Используются для фикстур и диагностики; арифметика от них не зависит.

Форматы элементов:
- int, float: JSON number
- Fraction: строка "p/q" (например "1/3")
- Decimal: строка (например "0.1")
"""

import json
from decimal import Decimal
from fractions import Fraction
from typing import Any, Final, Literal, Union

from pydantic import BaseModel, Field, model_validator

from src.core.contracts.validators import validate_value_document
from src.core.linalg import (
    Matrix,
    OperandKind,
    Vector,
    fixed_matrix,
    fixed_vector,
    kind_of,
)
from src.core.math.numerical_safeguards import is_valid_float

ElementTypeName = Literal["int", "float", "Fraction", "Decimal"]

# Поддерживаемые типы элементов
ELEMENT_TYPES: Final[dict[str, type]] = {
    "int": int,
    "float": float,
    "Fraction": Fraction,
    "Decimal": Decimal,
}

# Типы, элементы которых сериализуются строкой (без потери точности)
_STRING_ENCODED: Final[frozenset[str]] = frozenset({"Fraction", "Decimal"})

ElementValue = Union[int, float, str]


# =============================================================================
# DOCUMENT MODELS
# =============================================================================


class VectorDocument(BaseModel):
    """Документ вектора."""

    kind: Literal["vector"] = "vector"
    element_type: ElementTypeName = Field(..., description="Тип элементов")
    size: int = Field(..., ge=1, description="Длина N")
    elements: list[ElementValue] = Field(..., min_length=1, description="Элементы")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_element_count(self) -> "VectorDocument":
        if len(self.elements) != self.size:
            raise ValueError(
                f"Vector document declares size {self.size} "
                f"but has {len(self.elements)} elements"
            )
        return self


class MatrixDocument(BaseModel):
    """Документ матрицы, элементы в row-major порядке."""

    kind: Literal["matrix"] = "matrix"
    element_type: ElementTypeName = Field(..., description="Тип элементов")
    rows: int = Field(..., ge=1, description="Число строк R")
    columns: int = Field(..., ge=1, description="Число столбцов C")
    elements: list[ElementValue] = Field(..., min_length=1, description="Элементы")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_element_count(self) -> "MatrixDocument":
        expected = self.rows * self.columns
        if len(self.elements) != expected:
            raise ValueError(
                f"Matrix document declares {self.rows}x{self.columns} "
                f"but has {len(self.elements)} elements"
            )
        return self


# =============================================================================
# CONVERTERS
# =============================================================================


def _type_name(element_type: type) -> str:
    for name, candidate in ELEMENT_TYPES.items():
        if candidate is element_type:
            return name
    raise ValueError(f"Element type {element_type.__name__} has no document encoding")


def _encode(type_name: str, value: Any) -> ElementValue:
    if type_name in _STRING_ENCODED:
        return str(value)
    # JSON number не представляет NaN/Inf (pydantic пишет null)
    if type_name == "float" and not is_valid_float(value):
        raise ValueError(f"Element {value!r} is not finite and has no JSON number encoding")
    return value


def _decode(type_name: str, value: ElementValue) -> Any:
    if type_name in _STRING_ENCODED and isinstance(value, str):
        return ELEMENT_TYPES[type_name](value)
    return value


def to_document(value: Union[Vector, Matrix]) -> Union[VectorDocument, MatrixDocument]:
    """
    Конверсия значения в документ.

    Raises:
        TypeError: Если value не вектор и не матрица
        ValueError: Если тип элементов не поддерживается документом
            или float элемент равен NaN/Inf
    """
    kind = kind_of(value)
    if kind not in (OperandKind.VECTOR, OperandKind.MATRIX):
        raise TypeError(f"Expected a vector or matrix, got {type(value).__name__}")

    cls = type(value)
    type_name = _type_name(cls.element_type)
    elements = [_encode(type_name, e) for e in value.elements]

    if kind is OperandKind.VECTOR:
        return VectorDocument(element_type=type_name, size=cls.SIZE, elements=elements)
    return MatrixDocument(
        element_type=type_name, rows=cls.ROWS, columns=cls.COLUMNS, elements=elements
    )


def from_document(document: Union[VectorDocument, MatrixDocument]) -> Union[Vector, Matrix]:
    """
    Конверсия документа в значение.

    Raises:
        ElementTypeMismatchError: Если элемент не приводится к типу без потерь
    """
    element_type = ELEMENT_TYPES[document.element_type]
    elements = [_decode(document.element_type, e) for e in document.elements]

    if isinstance(document, VectorDocument):
        return fixed_vector(element_type, document.size)(*elements)
    return fixed_matrix(element_type, document.rows, document.columns)(*elements)


def dumps(value: Union[Vector, Matrix]) -> str:
    """Значение -> JSON строка."""
    return to_document(value).model_dump_json()


def loads(text: str) -> Union[Vector, Matrix]:
    """
    JSON строка -> значение.

    Сначала проверяется JSON Schema контракт, затем Pydantic модель.

    Raises:
        jsonschema.ValidationError: Если документ нарушает схему
        pydantic.ValidationError: Если число элементов не совпадает с формой
    """
    data = json.loads(text)
    validate_value_document(data)

    if data["kind"] == "vector":
        return from_document(VectorDocument.model_validate(data))
    return from_document(MatrixDocument.model_validate(data))
