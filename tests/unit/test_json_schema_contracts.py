"""
Tests for JSON Schema Contract Validators and Value Documents

Комплексное тестирование контрактов векторов и матриц:
- Валидность самих схем
- Валидация правильных документов
- Детекция нарушений required полей, типов, enum
- Согласованность числа элементов с формой (Pydantic)
- Конверсия значение <-> документ <-> JSON
"""

import json
from decimal import Decimal
from fractions import Fraction

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.core.contracts import (
    MatrixDocument,
    MatrixDocumentValidator,
    SchemaLoader,
    VectorDocument,
    VectorDocumentValidator,
    dumps,
    from_document,
    loads,
    to_document,
    validate_matrix_document,
    validate_value_document,
    validate_vector_document,
)
from src.core.linalg import ElementTypeMismatchError, Matrix, Vector


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_vector_document():
    """Валидный документ вектора."""
    return {
        "kind": "vector",
        "element_type": "int",
        "size": 3,
        "elements": [5, 2, 3],
    }


@pytest.fixture
def valid_matrix_document():
    """Валидный документ матрицы 2x3."""
    return {
        "kind": "matrix",
        "element_type": "int",
        "rows": 2,
        "columns": 3,
        "elements": [1, 2, 3, 4, 5, 6],
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


def test_schema_loader_loads_all_schemas():
    """Все схемы загружаются и проходят meta-validation."""
    loader = SchemaLoader()
    for name in ("vector", "matrix"):
        schema = loader.load_schema(name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"


def test_schema_loader_caches():
    """Повторная загрузка возвращает тот же объект."""
    loader = SchemaLoader()
    assert loader.load_schema("vector") is loader.load_schema("vector")


def test_schema_loader_missing_schema():
    """Неизвестная схема — FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        SchemaLoader().load_schema("tensor")


def test_schema_loader_missing_directory(tmp_path):
    """Несуществующий каталог схем — RuntimeError."""
    with pytest.raises(RuntimeError, match="Schema directory not found"):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path):
    """Невалидная JSON Schema отклоняется."""
    (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON Schema"):
        SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# VECTOR CONTRACT
# =============================================================================


def test_vector_document_valid(valid_vector_document):
    """Валидный документ вектора проходит проверку."""
    validate_vector_document(valid_vector_document)
    assert VectorDocumentValidator().is_valid(valid_vector_document)


def test_vector_document_missing_field(valid_vector_document):
    """Валидация отклоняет отсутствие обязательного поля."""
    data = dict(valid_vector_document)
    del data["size"]

    with pytest.raises(ValidationError) as exc_info:
        validate_vector_document(data)
    assert "'size' is a required property" in str(exc_info.value)


def test_vector_document_wrong_element_type_name(valid_vector_document):
    """Валидация отклоняет неизвестный тип элементов."""
    data = dict(valid_vector_document, element_type="bool")
    with pytest.raises(ValidationError):
        validate_vector_document(data)


def test_vector_document_rejects_non_numeric_elements(valid_vector_document):
    """Элементы — числа или строки."""
    data = dict(valid_vector_document, elements=[1, None, 3])
    errors = list(VectorDocumentValidator().iter_errors(data))
    assert len(errors) == 1


def test_vector_document_rejects_extra_fields(valid_vector_document):
    """Лишние поля запрещены."""
    data = dict(valid_vector_document, rows=1)
    with pytest.raises(ValidationError):
        validate_vector_document(data)


# =============================================================================
# MATRIX CONTRACT
# =============================================================================


def test_matrix_document_valid(valid_matrix_document):
    """Валидный документ матрицы проходит проверку."""
    validate_matrix_document(valid_matrix_document)
    assert MatrixDocumentValidator().is_valid(valid_matrix_document)


def test_matrix_document_zero_rows(valid_matrix_document):
    """rows >= 1."""
    data = dict(valid_matrix_document, rows=0)
    with pytest.raises(ValidationError):
        validate_matrix_document(data)


def test_value_document_dispatches_on_kind(valid_vector_document, valid_matrix_document):
    """validate_value_document выбирает схему по kind."""
    validate_value_document(valid_vector_document)
    validate_value_document(valid_matrix_document)

    with pytest.raises(ValidationError, match="Unknown document kind"):
        validate_value_document({"kind": "tensor"})

    # Документ матрицы с kind=vector нарушает схему вектора
    with pytest.raises(ValidationError):
        validate_value_document(dict(valid_matrix_document, kind="vector"))


# =============================================================================
# PYDANTIC DOCUMENTS
# =============================================================================


def test_vector_document_element_count_checked():
    """Pydantic модель проверяет соответствие size и числа элементов."""
    with pytest.raises(PydanticValidationError, match="declares size 3"):
        VectorDocument(element_type="int", size=3, elements=[1, 2])


def test_matrix_document_element_count_checked():
    """Pydantic модель проверяет rows * columns."""
    with pytest.raises(PydanticValidationError, match="declares 2x2"):
        MatrixDocument(element_type="int", rows=2, columns=2, elements=[1, 2, 3])


def test_documents_are_immutable(valid_vector_document):
    """Документы immutable (frozen=True)."""
    document = VectorDocument.model_validate(valid_vector_document)
    with pytest.raises(PydanticValidationError):
        document.size = 4


# =============================================================================
# CONVERSION
# =============================================================================


def test_to_document_vector():
    """Вектор -> документ."""
    document = to_document(Vector[int, 3](5, 2, 3))
    assert isinstance(document, VectorDocument)
    assert document.element_type == "int"
    assert document.size == 3
    assert document.elements == [5, 2, 3]


def test_to_document_matrix():
    """Матрица -> документ, элементы row-major."""
    document = to_document(Matrix[int, 2, 3].from_rows([[1, 2, 3], [4, 5, 6]]))
    assert isinstance(document, MatrixDocument)
    assert (document.rows, document.columns) == (2, 3)
    assert document.elements == [1, 2, 3, 4, 5, 6]


def test_to_document_rejects_non_values():
    """Скаляры и прочие значения не конвертируются."""
    with pytest.raises(TypeError):
        to_document(24)


def test_to_document_rejects_unsupported_element_type():
    """complex не имеет JSON-представления."""
    with pytest.raises(ValueError, match="no document encoding"):
        to_document(Vector[complex, 1](1j))


def test_from_document_builds_sized_value(valid_matrix_document):
    """Документ -> значение нужного sized-класса."""
    value = from_document(MatrixDocument.model_validate(valid_matrix_document))
    assert type(value) is Matrix[int, 2, 3]
    assert value == Matrix[int, 2, 3](1, 2, 3, 4, 5, 6)


def test_from_document_lossy_element_rejected():
    """Элемент, не приводимый к int без потерь, отклоняется."""
    document = VectorDocument(element_type="int", size=2, elements=[1, 2.5])
    with pytest.raises(ElementTypeMismatchError):
        from_document(document)


def test_json_roundtrip_exact_types():
    """Fraction и Decimal сохраняют точность через JSON."""
    v = Vector[Fraction, 2](Fraction(1, 3), Fraction(-2, 7))
    m = Matrix[Decimal, 1, 2](Decimal("0.1"), Decimal("2.50"))

    assert loads(dumps(v)) == v
    assert loads(dumps(m)) == m
    assert json.loads(dumps(v))["elements"] == ["1/3", "-2/7"]


def test_loads_checks_schema_first(valid_vector_document):
    """loads отклоняет документ, нарушающий схему."""
    data = dict(valid_vector_document, size=-1)
    with pytest.raises(ValidationError):
        loads(json.dumps(data))


def test_loads_checks_element_count(valid_vector_document):
    """loads отклоняет документ с неверным числом элементов."""
    data = dict(valid_vector_document, elements=[1, 2])
    with pytest.raises(PydanticValidationError):
        loads(json.dumps(data))


@pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
def test_to_document_rejects_non_finite_float(bad):
    """NaN/Inf не имеют JSON number представления — ValueError, а не null."""
    v = Vector[float, 2](bad, 1.0)
    with pytest.raises(ValueError, match="not finite"):
        to_document(v)
    with pytest.raises(ValueError, match="not finite"):
        dumps(v)


def test_decimal_infinity_roundtrip():
    """Decimal кодируется строкой, поэтому Infinity сохраняется."""
    v = Vector[Decimal, 2](Decimal("Infinity"), Decimal("1.5"))
    assert json.loads(dumps(v))["elements"] == ["Infinity", "1.5"]
    assert loads(dumps(v)) == v
