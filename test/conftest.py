import pytest
import pytest_asyncio
import os
import sys
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Добавляем корневую директорию проекта в путь Python
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from app.core.logging_config import setup_test_logging


setup_test_logging("DEBUG")


# Пометки для группировки тестов
def pytest_configure(config):
    """Регистрируем кастомные маркеры"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (may be slow)"
    )
    config.addinivalue_line(
        "markers", "database: marks tests that use database"
    )


@pytest.fixture
def now():
    """Фиксированное 'сейчас': 18 октября 2026, 12:00 UTC"""
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def db():
    """Tortoise ORM на SQLite в памяти со сгенерированной схемой"""
    from app.core.db import close_db, init_db

    await init_db("sqlite://:memory:", generate_schemas=True)
    yield
    await close_db()


def make_completion(text):
    """Ответ chat.completions.create в форме, которую читает GenerationClient"""
    response = MagicMock()
    if text is None:
        response.choices = []
    else:
        choice = MagicMock()
        choice.message.content = text
        response.choices = [choice]
    return response


@pytest.fixture
def openai_client():
    """Мок AsyncOpenAI: настраивается через openai_client.chat.completions.create.side_effect"""
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client
