"""
Operation Schema — Модели реестра схем операций

Реестр описывает каждую операцию блокчейна: какие поля у неё есть, какого
они типа, какие значения по умолчанию, и какой уровень ключа (authority)
нужен для подписи.

Immutable Pydantic модели. Реестр передаётся явно в каждый вызов
(процессор транзакций, резолвер authority, транскодер legacy URI),
глобального экземпляра нет.

Формат исходного JSON:
    {
      "<operation>": {
        "authority": "posting" | "active",      (опционально)
        "schema": {
          "<field>": {"type": "<type>", "defaultValue": <any>}
        }
      }
    }
"""

from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class FieldType(str, Enum):
    """
    Закрытое множество типов полей.

    Любая неизвестная строка типа ("string", "asset", ...) → OPAQUE:
    значение такого поля передаётся без изменений.
    """

    AMOUNT = "amount"
    INT = "int"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"
    OPAQUE = "opaque"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "FieldType":
        """Тип по строке из реестра (OPAQUE для всего нераспознанного)"""
        for member in cls:
            if member.value == name and member is not cls.OPAQUE:
                return member
        return cls.OPAQUE

    @property
    def is_structured(self) -> bool:
        """ARRAY/OBJECT приходят в query string как JSON"""
        return self in (FieldType.ARRAY, FieldType.OBJECT)


class Authority(str, Enum):
    """
    Уровень ключа, необходимый для подписи.

    Упорядочен: posting < active. Отсутствие требования выражается через None.
    """

    POSTING = "posting"
    ACTIVE = "active"

    @property
    def rank(self) -> int:
        return _AUTHORITY_RANK[self]


_AUTHORITY_RANK: Dict[Authority, int] = {
    Authority.POSTING: 1,
    Authority.ACTIVE: 2,
}


# =============================================================================
# ERRORS
# =============================================================================


class UnknownOperationError(KeyError):
    """Операция отсутствует в реестре схем"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Operation '{self.name}' is not present in the schema registry"


# =============================================================================
# MODELS
# =============================================================================


class FieldSpec(BaseModel):
    """
    Описание одного поля операции.

    default_value считается заданным, если ключ defaultValue присутствует
    в исходных данных (в том числе со значением null).
    """

    type: Optional[str] = Field(None, description="Тип поля (строка из реестра)")
    default_value: Any = Field(None, alias="defaultValue", description="Значение по умолчанию")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @property
    def kind(self) -> FieldType:
        """Тип поля как элемент закрытого enum"""
        return FieldType.from_name(self.type)

    @property
    def has_default(self) -> bool:
        return "default_value" in self.model_fields_set


class OperationSchema(BaseModel):
    """
    Схема одной операции: поля и требуемый уровень authority.

    Порядок полей сохраняется из исходного JSON и определяет порядок ключей
    в обработанном payload.
    """

    authority: Optional[Authority] = Field(None, description="Требуемый уровень ключа")
    field_specs: Dict[str, FieldSpec] = Field(
        default_factory=dict, alias="schema", description="Поля операции"
    )

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}


class OperationRegistry(BaseModel):
    """
    Реестр схем операций (read-only).

    Поддерживает `name in registry` и len().
    """

    operations: Dict[str, OperationSchema] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OperationRegistry":
        """
        Построение реестра из словаря в формате исходного JSON.

        Args:
            data: {operation_name: {"authority": ..., "schema": {...}}}

        Returns:
            OperationRegistry

        Raises:
            pydantic.ValidationError: Если структура не соответствует модели
        """
        return cls(operations={name: OperationSchema.model_validate(entry) for name, entry in data.items()})

    def get(self, name: str) -> Optional[OperationSchema]:
        return self.operations.get(name)

    def require(self, name: str) -> OperationSchema:
        """
        Схема операции. Отсутствие операции означает ошибку конфигурации вызывающего кода.

        Raises:
            UnknownOperationError: Если операции нет в реестре
        """
        schema = self.operations.get(name)
        if schema is None:
            raise UnknownOperationError(name)
        return schema

    def __contains__(self, name: object) -> bool:
        return name in self.operations

    def names(self) -> Iterator[str]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)
