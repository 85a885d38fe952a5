"""
Registry Contract Validation

Файл реестра схем операций приходит извне (поставляется вместе с клиентом
или обновляется отдельно), поэтому перед построением OperationRegistry он
проверяется по формальному JSON Schema контракту.

Контракты лежат в contracts/schema/ в корне проекта:
- operation_registry.json (реестр схем операций)
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator, List, Mapping

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.operation_schema import OperationRegistry


PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[3]
DEFAULT_SCHEMA_DIR: Final[Path] = PROJECT_ROOT / "contracts" / "schema"

OPERATION_REGISTRY_CONTRACT: Final[str] = "operation_registry"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик контрактов из каталога схем.

    Каждый контракт читается один раз и проходит meta-validation по
    Draft 2020-12 до того, как по нему что-либо проверяется.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def available(self) -> List[str]:
        """Имена контрактов в каталоге (без расширения)."""
        return sorted(path.stem for path in self._schema_dir.glob("*.json"))

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Контракт по имени.

        Args:
            schema_name: Имя без расширения, например 'operation_registry'

        Raises:
            FileNotFoundError: Файла контракта нет
            json.JSONDecodeError: Файл не является JSON
            ValueError: Файл не является корректной JSON Schema
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


def format_error(error: ValidationError) -> str:
    """Ошибка контракта с путём до значения: 'vote.authority: ...'."""
    location = ".".join(str(part) for part in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


class ContractValidator:
    """Проверка данных по одному контракту."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            ValidationError: Первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)

    def error_messages(self, data: Any) -> List[str]:
        """Все нарушения контракта в стабильном порядке (по пути до значения)."""
        errors = sorted(self.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
        return [format_error(error) for error in errors]


class OperationRegistryValidator(ContractValidator):
    """Контракт файла реестра схем операций"""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(OPERATION_REGISTRY_CONTRACT, loader)


# =============================================================================
# REGISTRY LOADING
# =============================================================================


def validate_operation_registry(data: Mapping[str, Any]) -> None:
    """
    Raises:
        ValidationError: Данные реестра нарушают контракт
    """
    OperationRegistryValidator().validate(data)


def load_operation_registry(path: str | Path) -> OperationRegistry:
    """
    Реестр схем операций из JSON файла.

    Файл проверяется по контракту operation_registry, только затем из него
    строится неизменяемый OperationRegistry.

    Raises:
        FileNotFoundError: Файла нет
        json.JSONDecodeError: Файл не является JSON
        ValidationError: Данные нарушают контракт
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    validate_operation_registry(data)
    return OperationRegistry.from_mapping(data)
