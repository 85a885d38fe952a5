"""Общие fixtures для unit тестов."""

from pathlib import Path

import pytest

from src.core.contracts import load_operation_registry
from src.core.domain import ConversionContext, OperationRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def registry_path() -> Path:
    """Путь к тестовому реестру схем операций."""
    return FIXTURES_DIR / "operations.json"


@pytest.fixture
def registry(registry_path) -> OperationRegistry:
    """Тестовый реестр схем операций (загружен через контракт)."""
    return load_operation_registry(registry_path)


@pytest.fixture
def context() -> ConversionContext:
    """Контекст конверсии: 1 VESTS = 2 SP."""
    return ConversionContext(vests_to_sp=2.0)
