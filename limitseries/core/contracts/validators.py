"""
JSON Schema Contract Validators

Валидация JSON-представлений результатов движка. Доменные модели вызывают
валидаторы сами: Monomial.to_contract_dict, snapshot и
LimitResult.to_contract_dict не возвращают данные, не прошедшие схему.

Схемы (limitseries/core/contracts/schema/) связаны через $id:
- monomial.json: ведущий член и общий $defs/scalar
- series_snapshot.json: конечный prefix multiseries, рекурсивный ($ref "#")
- limit_result.json: результат find_limit, ссылается на monomial.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator, List, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match
from referencing import Registry, Resource

SCHEMA_BASE_URI: Final[str] = "https://limitseries.dev/schema/"

# Схемы, поставляемые с пакетом (загружаются в registry вместе)
CONTRACT_SCHEMAS: Final[tuple[str, ...]] = ("monomial", "series_snapshot", "limit_result")


def schema_uri(schema_name: str) -> str:
    return f"{SCHEMA_BASE_URI}{schema_name}.json"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик контрактных схем и registry для межсхемных $ref.

    Args:
        schema_dir: Каталог со схемами (default: package data рядом с модулем)
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._registry: Optional[Registry] = None

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы.

        Args:
            schema_name: Имя схемы без расширения (например, 'monomial')

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema или
                его $id не совпадает с ожидаемым
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        expected_id = schema_uri(schema_name)
        if schema.get("$id") != expected_id:
            raise ValueError(
                f"{schema_name}.json must declare $id {expected_id!r}, got {schema.get('$id')!r}"
            )

        self._schemas[schema_name] = schema
        return schema

    @property
    def registry(self) -> Registry:
        """Registry со всеми CONTRACT_SCHEMAS (для $ref между файлами)."""
        if self._registry is None:
            self._registry = Registry().with_resources(
                (schema_uri(name), Resource.from_contents(self.load_schema(name)))
                for name in CONTRACT_SCHEMAS
            )
        return self._registry


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта.

    validate() выбрасывает самую релевантную ошибку (best_match), errors()
    возвращает все нарушения в виде "json_path: message".
    """

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        loader = loader or _SCHEMA_LOADER
        self.schema = loader.load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema, registry=loader.registry)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        error = best_match(self.validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def errors(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения, отсортированные по пути в документе."""
        found = sorted(self.validator.iter_errors(data), key=lambda e: e.json_path)
        return [f"{e.json_path}: {e.message}" for e in found]


class MonomialValidator(ContractValidator):
    schema_name = "monomial"


class SeriesSnapshotValidator(ContractValidator):
    schema_name = "series_snapshot"


class LimitResultValidator(ContractValidator):
    schema_name = "limit_result"


_VALIDATOR_TYPES: Final[Dict[str, type]] = {
    cls.schema_name: cls
    for cls in (MonomialValidator, SeriesSnapshotValidator, LimitResultValidator)
}

# Построенные валидаторы (Draft202012Validator переиспользуется между вызовами)
_VALIDATORS: Dict[str, ContractValidator] = {}


def get_validator(schema_name: str) -> ContractValidator:
    """
    Общий экземпляр валидатора для схемы.

    Raises:
        KeyError: Если схема не входит в CONTRACT_SCHEMAS
    """
    if schema_name not in _VALIDATORS:
        if schema_name not in _VALIDATOR_TYPES:
            raise KeyError(f"Unknown contract schema: {schema_name!r}")
        _VALIDATORS[schema_name] = _VALIDATOR_TYPES[schema_name]()
    return _VALIDATORS[schema_name]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_monomial(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют monomial.json
    """
    get_validator("monomial").validate(data)


def validate_series_snapshot(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют series_snapshot.json
    """
    get_validator("series_snapshot").validate(data)


def validate_limit_result(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют limit_result.json
    """
    get_validator("limit_result").validate(data)
