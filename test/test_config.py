from app.core.config import GenerationConfig, Settings, StoreConfig, get_settings, reset_settings


class TestSettings:
    """Тесты настроек и конфигурационных структур"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GENERATION_MODELS", raising=False)
        settings = Settings(_env_file=None)

        config = settings.generation_config()
        assert config.temperature == 0.7
        assert config.max_output_tokens == 800
        assert config.models[0] == "gemini-2.5-flash"
        assert settings.store_config() == StoreConfig(activity_limit=10, history_limit=5)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("GENERATION_API_KEY", "secret")
        monkeypatch.setenv("GENERATION_MODELS", '["primary", "backup"]')
        monkeypatch.setenv("HISTORY_LIMIT", "3")

        settings = Settings(_env_file=None)

        assert settings.generation_config() == GenerationConfig(
            api_key="secret",
            base_url=settings.generation_base_url,
            models=("primary", "backup"),
        )
        assert settings.store_config().history_limit == 3

    def test_postgres_dsn(self):
        settings = Settings(_env_file=None, db_user="u", db_password="p", db_host="h", db_port=5433, db_name="n")
        assert settings.postgres_dsn == "postgres://u:p@h:5433/n"

    def test_get_settings_is_cached(self):
        reset_settings()
        assert get_settings() is get_settings()
        reset_settings()
