"""
Domain models and value objects.

Contains the operation schema registry, signing authority levels and
monetary units.
"""

from src.core.domain.operation_schema import (
    Authority,
    FieldSpec,
    FieldType,
    OperationRegistry,
    OperationSchema,
    UnknownOperationError,
)
from src.core.domain.units import (
    AMOUNT_UNIT_PRIORITY,
    LIQUID_PRECISION,
    VESTS_PRECISION,
    AssetUnit,
    ConversionContext,
    detect_amount_unit,
    format_amount,
    format_number,
    get_vests_to_sp,
)

__all__ = [
    # Operation schema registry
    "FieldType",
    "Authority",
    "FieldSpec",
    "OperationSchema",
    "OperationRegistry",
    "UnknownOperationError",
    # Units module
    "AssetUnit",
    "AMOUNT_UNIT_PRIORITY",
    "VESTS_PRECISION",
    "LIQUID_PRECISION",
    "ConversionContext",
    "detect_amount_unit",
    "format_amount",
    "format_number",
    "get_vests_to_sp",
]
