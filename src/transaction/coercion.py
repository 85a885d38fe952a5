"""Value Coercion — приведение сырого значения поля к типу из схемы.

Сырые значения приходят из query string или от внешнего производителя
(обычно строки). Результат готов к отображению и подписи:
- AMOUNT: сумма с нормализованной точностью, SP пересчитывается в VESTS
- INT: целое (NOT_A_NUMBER для нечислового ввода)
- BOOL: "false"/False → False, остальное без изменений
- ARRAY/OBJECT/OPAQUE: значение без изменений

Функция чистая и никогда не бросает исключений для значений полей.
"""

import math
from typing import Any, Mapping

from src.core.domain.operation_schema import FieldSpec, FieldType
from src.core.domain.units import AssetUnit, ConversionContext, detect_amount_unit, format_amount
from src.core.math.numeric_parsing import parse_float, parse_int


def is_missing(value: Any) -> bool:
    """Пустое значение: None, False, "", 0 или NaN.

    Пустые коллекции пустыми не считаются: [] и {} это осмысленные значения
    полей типа array/object.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def effective_value(spec: FieldSpec, raw_value: Any) -> Any:
    """Сырое значение, либо default поля, если сырое пустое и default задан."""
    if is_missing(raw_value) and spec.has_default:
        return spec.default_value
    return raw_value


def _coerce_amount(value: Any, context: ConversionContext) -> Any:
    if not isinstance(value, str):
        return value

    unit = detect_amount_unit(value)
    if unit is None:
        return value

    magnitude = parse_float(value)
    if unit == AssetUnit.SP:
        # SP только единица отображения, хранение в VESTS
        return format_amount(context.sp_to_vests(magnitude), AssetUnit.VESTS)
    return format_amount(magnitude, unit)


def coerce_value(
    schema: Mapping[str, FieldSpec],
    key: str,
    raw_value: Any,
    context: ConversionContext,
) -> Any:
    """Приведение значения поля `key` по его описанию в схеме операции.

    Args:
        schema: Поля операции (OperationSchema.field_specs)
        key: Имя поля, обязано присутствовать в schema
        raw_value: Сырое значение из payload (может отсутствовать → None)
        context: Контекст денежной конверсии

    Returns:
        Приведённое значение

    Raises:
        KeyError: Если поля нет в схеме (ошибка вызывающего кода)
    """
    spec = schema[key]
    value = effective_value(spec, raw_value)
    kind = spec.kind

    if kind is FieldType.AMOUNT:
        return _coerce_amount(value, context)
    if kind is FieldType.INT:
        return parse_int(value)
    if kind is FieldType.BOOL:
        # Принудительно приводится только false; остальное остаётся как есть
        if raw_value == "false" or raw_value is False:
            return False
        return value
    if kind in (FieldType.ARRAY, FieldType.OBJECT, FieldType.OPAQUE):
        return value

    raise AssertionError(f"Unhandled field type: {kind}")
