from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class GenerationConfig(BaseModel):
    """Параметры генерации, передаются в GenerationClient по значению"""
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    models: tuple[str, ...] = ()
    temperature: float = 0.7
    max_output_tokens: int = 800


class StoreConfig(BaseModel):
    """Параметры выборки из хранилища записей"""
    model_config = ConfigDict(frozen=True)

    activity_limit: int = 10
    history_limit: int = 5


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Параметры базы данных
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432)
    db_name: str = Field(default="taskpulse")
    db_user: str = Field(default="user")
    db_password: str = Field(default="password")

    # Генерация текста (OpenAI-совместимый API)
    generation_api_key: str | None = Field(default=None)
    generation_base_url: str | None = Field(default="https://generativelanguage.googleapis.com/v1beta/openai/")
    generation_models: list[str] = Field(default=["gemini-2.5-flash", "gemini-2.0-flash", "gemini-1.5-flash"])
    generation_temperature: float = Field(default=0.7)
    generation_max_tokens: int = Field(default=800)

    # Окна выборки контекста
    activity_limit: int = Field(default=10)
    history_limit: int = Field(default=5)

    # Остальные настройки
    timezone: str = "UTC"
    log_level: str = "INFO"

    @property
    def postgres_dsn(self) -> str:
        """Конструирует DSN для PostgreSQL из отдельных параметров"""
        return f"postgres://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    def generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            api_key=self.generation_api_key,
            base_url=self.generation_base_url,
            models=tuple(self.generation_models),
            temperature=self.generation_temperature,
            max_output_tokens=self.generation_max_tokens,
        )

    def store_config(self) -> StoreConfig:
        return StoreConfig(activity_limit=self.activity_limit, history_limit=self.history_limit)


settings = None

def get_settings() -> Settings:
    """Получить настройки приложения с ленивой инициализацией"""
    global settings
    if settings is None:
        settings = Settings()
    return settings

def reset_settings():
    """Сбросить кэшированные настройки (для тестирования)"""
    global settings
    settings = None
