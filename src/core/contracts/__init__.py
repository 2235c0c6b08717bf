"""
Contract Validation Module

JSON-документы векторов и матриц: JSON Schema контракты и Pydantic модели.
"""

from .documents import (
    ELEMENT_TYPES,
    MatrixDocument,
    VectorDocument,
    dumps,
    from_document,
    loads,
    to_document,
)
from .validators import (
    ContractValidator,
    MatrixDocumentValidator,
    SchemaLoader,
    VectorDocumentValidator,
    validate_matrix_document,
    validate_value_document,
    validate_vector_document,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "VectorDocumentValidator",
    "MatrixDocumentValidator",
    "VectorDocument",
    "MatrixDocument",
    # Constants
    "ELEMENT_TYPES",
    # Functions
    "validate_vector_document",
    "validate_matrix_document",
    "validate_value_document",
    "to_document",
    "from_document",
    "dumps",
    "loads",
]
