"""Node Errors — текст ошибки из ответа RPC ноды.

Ошибка ноды несёт шаблон в stack[0].format с placeholder'ами ${key},
значения которых лежат в stack[0].data. Если шаблона нет, используется
message.
"""

from typing import Any, Mapping


def _first_stack_entry(error: Any) -> Mapping[str, Any] | None:
    stack = error.get("stack") if isinstance(error, Mapping) else getattr(error, "stack", None)
    if isinstance(stack, list) and stack and isinstance(stack[0], Mapping):
        return stack[0]
    return None


def get_error_message(error: Any) -> str:
    """Человекочитаемое сообщение об ошибке транзакции.

    Args:
        error: Ответ ноды (dict) или исключение с атрибутами stack/message

    Returns:
        Сообщение или пустая строка
    """
    entry = _first_stack_entry(error)
    if entry is not None and "format" in entry:
        message = str(entry["format"])
        data = entry.get("data")
        if isinstance(data, Mapping):
            for key, value in data.items():
                message = message.replace(f"${{{key}}}", str(value))
        return message

    message = error.get("message") if isinstance(error, Mapping) else getattr(error, "message", None)
    if message is None and isinstance(error, Exception) and error.args:
        message = str(error)
    return str(message) if message else ""
