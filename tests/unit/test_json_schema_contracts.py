"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и enum
- Межсхемные $ref через registry
- Интеграция с доменными моделями (to_contract_dict, snapshot валидируют себя)
"""

import json
from fractions import Fraction

import pytest
import sympy
from jsonschema import ValidationError

from limitseries.core.contracts import (
    CONTRACT_SCHEMAS,
    LimitResultValidator,
    MonomialValidator,
    SchemaLoader,
    SeriesSnapshotValidator,
    get_validator,
    schema_uri,
    validate_limit_result,
    validate_monomial,
    validate_series_snapshot,
)
from limitseries.core.domain import (
    Monomial,
    constant,
    from_generator,
    from_terms,
    snapshot,
    zero,
)
from limitseries.core.lazy import Next


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_monomial():
    """Валидный monomial для тестирования."""
    return {"coefficient": -2.5, "exponents": [1, "1/2", 0]}


@pytest.fixture
def valid_ok_result():
    """Валидный успешный limit_result."""
    return {
        "ok": True,
        "verdict": {"kind": "POS_INF", "value": None},
        "failure": None,
        "monomial": {"coefficient": 3, "exponents": [2]},
        "fuel_used": 2,
        "details": "leading term 3 * b0^2 → +oo",
    }


@pytest.fixture
def valid_failed_result():
    """Валидный limit_result с отказом."""
    return {
        "ok": False,
        "verdict": None,
        "failure": "OUT_OF_FUEL",
        "monomial": None,
        "fuel_used": 64,
        "details": "fuel exhausted",
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    @pytest.mark.parametrize("name", ["monomial", "series_snapshot", "limit_result"])
    def test_schemas_load_and_are_valid(self, name) -> None:
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("monomial") is loader.load_schema("monomial")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("basis")

    @pytest.mark.parametrize("name", CONTRACT_SCHEMAS)
    def test_schema_ids(self, name) -> None:
        assert SchemaLoader().load_schema(name)["$id"] == schema_uri(name)

    def test_mismatched_id_rejected(self, tmp_path) -> None:
        schema = {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            "$id": "https://example.invalid/other.json",
            "type": "object",
        }
        (tmp_path / "monomial.json").write_text(json.dumps(schema), encoding="utf-8")

        with pytest.raises(ValueError, match=r"must declare \$id"):
            SchemaLoader(tmp_path).load_schema("monomial")

    def test_invalid_schema_rejected(self, tmp_path) -> None:
        schema = {"$schema": "https://json-schema.org/draft/2020-12/schema", "type": 5}
        (tmp_path / "monomial.json").write_text(json.dumps(schema), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("monomial")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")


class TestValidatorRegistry:
    def test_shared_instances(self) -> None:
        assert get_validator("monomial") is get_validator("monomial")
        assert isinstance(get_validator("limit_result"), LimitResultValidator)

    def test_unknown_schema(self) -> None:
        with pytest.raises(KeyError, match="basis"):
            get_validator("basis")

    def test_best_match_raised(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            validate_monomial({"coefficient": 1})
        assert excinfo.value.validator == "required"

    def test_errors_listed_by_path(self) -> None:
        errors = MonomialValidator().errors({"coefficient": None})

        assert errors[0] == "$: 'exponents' is a required property"
        assert errors[1].startswith("$.coefficient: ")
        assert MonomialValidator().errors({"coefficient": 1, "exponents": []}) == []


# =============================================================================
# MONOMIAL
# =============================================================================


class TestMonomialContract:
    def test_valid(self, valid_monomial) -> None:
        validate_monomial(valid_monomial)

    def test_missing_exponents(self, valid_monomial) -> None:
        del valid_monomial["exponents"]
        with pytest.raises(ValidationError, match="exponents"):
            validate_monomial(valid_monomial)

    def test_extra_field(self, valid_monomial) -> None:
        valid_monomial["degree"] = 3
        assert not MonomialValidator().is_valid(valid_monomial)

    @pytest.mark.parametrize("coefficient", [None, True, "", [1]])
    def test_invalid_coefficient(self, valid_monomial, coefficient) -> None:
        valid_monomial["coefficient"] = coefficient
        assert not MonomialValidator().is_valid(valid_monomial)

    def test_model_integration(self) -> None:
        m = Monomial(coefficient=sympy.sqrt(3), exponents=(Fraction(-1, 2), sympy.Integer(1)))
        validate_monomial(m.to_contract_dict())

    def test_to_contract_dict_output(self) -> None:
        m = Monomial(coefficient=Fraction(3, 4), exponents=(2, Fraction(-1, 2)))
        assert m.to_contract_dict() == {"coefficient": "3/4", "exponents": [2, "-1/2"]}

    def test_depth_zero_model(self) -> None:
        assert Monomial(coefficient=7).to_contract_dict() == {"coefficient": 7, "exponents": []}


# =============================================================================
# SERIES SNAPSHOT
# =============================================================================


class TestSeriesSnapshotContract:
    def test_scalar_snapshot(self) -> None:
        validate_series_snapshot({"depth": 0, "scalar": 1})

    def test_nested_snapshot(self) -> None:
        inner = from_terms(1, [(1, Fraction(1, 2)), (0, 3)])
        validate_series_snapshot(snapshot(from_terms(2, [(2, inner)])))

    def test_constructed_snapshots(self) -> None:
        validate_series_snapshot(snapshot(constant(7.0, 3)))
        validate_series_snapshot(snapshot(zero(2)))
        infinite = from_generator(1, 0, lambda k: Next((-k, k), k + 1))
        validate_series_snapshot(snapshot(infinite, terms=3))

    def test_depth_zero_with_terms_rejected(self) -> None:
        data = {"depth": 0, "terms": [], "truncated": False}
        assert not SeriesSnapshotValidator().is_valid(data)

    def test_missing_truncated_rejected(self) -> None:
        data = {"depth": 1, "terms": []}
        assert not SeriesSnapshotValidator().is_valid(data)

    def test_bad_nested_coefficient_reported(self) -> None:
        data = {
            "depth": 1,
            "terms": [{"exponent": 1, "coefficient": {"depth": 0}}],
            "truncated": False,
        }
        errors = list(SeriesSnapshotValidator().iter_errors(data))
        assert errors


# =============================================================================
# LIMIT RESULT
# =============================================================================


class TestLimitResultContract:
    def test_valid_ok(self, valid_ok_result) -> None:
        validate_limit_result(valid_ok_result)

    def test_valid_failed(self, valid_failed_result) -> None:
        validate_limit_result(valid_failed_result)

    def test_finite_value(self, valid_ok_result) -> None:
        valid_ok_result["verdict"] = {"kind": "FINITE", "value": "sqrt(2)"}
        validate_limit_result(valid_ok_result)

    def test_unknown_kind(self, valid_ok_result) -> None:
        valid_ok_result["verdict"]["kind"] = "OSCILLATES"
        with pytest.raises(ValidationError):
            validate_limit_result(valid_ok_result)

    def test_unknown_failure(self, valid_failed_result) -> None:
        valid_failed_result["failure"] = "TIMEOUT"
        assert not LimitResultValidator().is_valid(valid_failed_result)

    def test_ok_without_verdict(self, valid_ok_result) -> None:
        valid_ok_result["verdict"] = None
        assert not LimitResultValidator().is_valid(valid_ok_result)

    def test_failed_with_verdict(self, valid_failed_result) -> None:
        valid_failed_result["verdict"] = {"kind": "POS_INF", "value": None}
        assert not LimitResultValidator().is_valid(valid_failed_result)

    def test_negative_fuel(self, valid_failed_result) -> None:
        valid_failed_result["fuel_used"] = -1
        assert not LimitResultValidator().is_valid(valid_failed_result)

    def test_monomial_resolved_from_monomial_schema(self, valid_ok_result) -> None:
        valid_ok_result["monomial"]["degree"] = 2
        assert not LimitResultValidator().is_valid(valid_ok_result)

    def test_monomial_scalar_definition_shared(self, valid_ok_result) -> None:
        valid_ok_result["verdict"] = {"kind": "FINITE", "value": ""}
        errors = LimitResultValidator().errors(valid_ok_result)
        assert any(e.startswith("$.verdict") for e in errors)
