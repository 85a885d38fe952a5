"""
Contract Validation Module

Проверка внешних JSON файлов (реестр схем операций) по контрактам
из contracts/schema/.
"""

from .validators import (
    DEFAULT_SCHEMA_DIR,
    OPERATION_REGISTRY_CONTRACT,
    ContractValidator,
    OperationRegistryValidator,
    SchemaLoader,
    format_error,
    load_operation_registry,
    validate_operation_registry,
)

__all__ = [
    "DEFAULT_SCHEMA_DIR",
    "OPERATION_REGISTRY_CONTRACT",
    "SchemaLoader",
    "ContractValidator",
    "OperationRegistryValidator",
    "format_error",
    "validate_operation_registry",
    "load_operation_registry",
]
