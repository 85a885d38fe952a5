"""Authority Resolver — минимальный уровень ключа для подписи транзакции.

Требуемый уровень транзакции равен максимуму по её операциям (posting < active).
Повышение монотонно: после active результат не понижается до posting,
поэтому порядок операций не влияет на результат.

Операции без записи в реестре или без объявленного authority нейтральны.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence

from src.core.domain.operation_schema import Authority, OperationRegistry


def required_authorities(
    operations: Iterable[Sequence[Any]], registry: OperationRegistry
) -> list[Authority]:
    """Объявленные уровни authority операций (нейтральные пропускаются)."""
    authorities = []
    for operation in operations:
        schema = registry.get(operation[0])
        if schema is not None and schema.authority is not None:
            authorities.append(schema.authority)
    return authorities


def resolve_authority(
    tx: Mapping[str, Any], registry: OperationRegistry
) -> Optional[Authority]:
    """Минимальный уровень ключа, достаточный для всех операций транзакции.

    Args:
        tx: Транзакция с полем operations
        registry: Реестр схем операций

    Returns:
        Authority.ACTIVE, Authority.POSTING или None, если ни одна операция
        не требует authority
    """
    resolved: Optional[Authority] = None
    for authority in required_authorities(tx["operations"], registry):
        if resolved is None or authority.rank > resolved.rank:
            resolved = authority
    return resolved
