from tortoise import Tortoise
from app.core.config import get_settings

MODEL_MODULES = [
    "app.models.profile",
    "app.models.task",
    "app.models.statistics",
    "app.models.activity",
    "app.models.conversation",
]


def get_tortoise_config(db_url: str = None) -> dict:
    """Конфигурация Tortoise ORM; db_url переопределяет DSN (например, sqlite://:memory: в тестах)"""
    return {
        "connections": {"default": db_url or get_settings().postgres_dsn},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


async def init_db(db_url: str = None, generate_schemas: bool = False) -> None:
    await Tortoise.init(config=get_tortoise_config(db_url))
    # Схемой в проде управляет внешний инструмент миграций
    if generate_schemas:
        await Tortoise.generate_schemas()


async def close_db() -> None:
    await Tortoise.close_connections()
