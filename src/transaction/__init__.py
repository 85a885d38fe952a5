"""Transaction — подготовка транзакции к отображению и подписи.

- Value coercion: приведение значений полей по схеме
- Transaction processor: нормализация всех операций envelope
- Authority resolver: минимальный уровень ключа для подписи
"""

from .authority import required_authorities, resolve_authority
from .coercion import coerce_value, effective_value, is_missing
from .node_errors import get_error_message
from .processor import TransactionProcessor, process_transaction

__all__ = [
    "coerce_value",
    "effective_value",
    "is_missing",
    "TransactionProcessor",
    "process_transaction",
    "required_authorities",
    "resolve_authority",
    "get_error_message",
]
