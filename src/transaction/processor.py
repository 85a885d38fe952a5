"""Transaction Processor — нормализация операций транзакции по схемам.

Каждая операция [name, payload] приводится к форме схемы:
- ключи payload: ровно поля, объявленные в схеме операции, в их порядке
- значения проходят через coerce_value
- поля payload, которых нет в схеме, отбрасываются

Входной envelope не изменяется: возвращается поверхностная копия с новым
tx и новым списком операций.
"""

from typing import Any, Dict, List, Mapping, Sequence

from src.core.domain.operation_schema import OperationRegistry
from src.core.domain.units import ConversionContext
from src.transaction.coercion import coerce_value


class TransactionProcessor:
    """Нормализация транзакции по реестру схем.

    Операция, отсутствующая в реестре, считается ошибкой вызывающего кода:
    показывать пользователю нераспознанную операцию небезопасно, поэтому
    пропуска нет, поднимается UnknownOperationError.
    """

    def __init__(self, registry: OperationRegistry):
        self._registry = registry

    def process_operation(
        self, operation: Sequence[Any], context: ConversionContext
    ) -> List[Any]:
        """Нормализация одной операции.

        Args:
            operation: [name, payload]
            context: Контекст денежной конверсии

        Returns:
            [name, processed_payload]

        Raises:
            UnknownOperationError: Если операции нет в реестре
        """
        name, payload = operation[0], operation[1]
        field_specs = self._registry.require(name).field_specs
        payload = payload or {}

        processed = {
            key: coerce_value(field_specs, key, payload.get(key), context)
            for key in field_specs
        }
        return [name, processed]

    def process(
        self, envelope: Mapping[str, Any], context: ConversionContext
    ) -> Dict[str, Any]:
        """Нормализация всех операций envelope["tx"]["operations"].

        Args:
            envelope: {"tx": {"operations": [...], ...}, ...}
            context: Контекст денежной конверсии

        Returns:
            Новый envelope; поля вне tx.operations переносятся без изменений

        Raises:
            UnknownOperationError: Если какой-либо операции нет в реестре
        """
        tx = envelope["tx"]
        operations = [self.process_operation(op, context) for op in tx["operations"]]

        processed = dict(envelope)
        processed["tx"] = {**tx, "operations": operations}
        return processed


def process_transaction(
    envelope: Mapping[str, Any],
    registry: OperationRegistry,
    context: ConversionContext,
) -> Dict[str, Any]:
    """Нормализация транзакции (см. TransactionProcessor.process)."""
    return TransactionProcessor(registry).process(envelope, context)
