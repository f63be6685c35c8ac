"""Tests for application configuration."""

from app.config import Settings, load_env_file


class TestSettings:
    """Tests for Settings class - only the parsing logic that matters."""

    def test_settings_loads_from_env(self, monkeypatch):
        """Settings reads values from environment variables."""
        monkeypatch.setenv("API_TITLE", "Test API")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("BACKEND_BASE_URL", "http://school.internal")

        test_settings = Settings()
        assert test_settings.api_title == "Test API"
        assert test_settings.debug is True
        assert test_settings.port == 9000
        assert test_settings.backend_base_url == "http://school.internal"

    def test_settings_debug_parses_boolean(self, monkeypatch):
        """Boolean values are parsed from strings."""
        monkeypatch.setenv("DEBUG", "True")
        assert Settings().debug is True

        monkeypatch.setenv("DEBUG", "false")
        assert Settings().debug is False

    def test_log_level_is_uppercased(self, monkeypatch):
        """LOG_LEVEL accepts lowercase names."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_backend_timeout_defaults_to_none(self, monkeypatch):
        """No timeout unless one is configured."""
        monkeypatch.delenv("BACKEND_TIMEOUT", raising=False)
        assert Settings().backend_timeout is None

    def test_backend_timeout_empty_string_is_none(self, monkeypatch):
        """An empty BACKEND_TIMEOUT disables the timeout."""
        monkeypatch.setenv("BACKEND_TIMEOUT", "")
        assert Settings().backend_timeout is None

    def test_backend_timeout_parses_float(self, monkeypatch):
        monkeypatch.setenv("BACKEND_TIMEOUT", "2.5")
        assert Settings().backend_timeout == 2.5

    def test_environment_helpers(self, monkeypatch):
        """is_production / is_development follow ENVIRONMENT."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        settings = Settings()
        assert settings.is_production is True
        assert settings.is_development is False

        monkeypatch.setenv("ENVIRONMENT", "development")
        settings = Settings()
        assert settings.is_production is False
        assert settings.is_development is True

    def test_env_file_in_working_directory_is_loaded(self, monkeypatch, tmp_path):
        """Values from a .env file reach Settings without overriding the environment."""
        (tmp_path / ".env").write_text(
            "BACKEND_BASE_URL=http://from-dotenv\nAPI_TITLE=Dotenv Title\n"
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("BACKEND_BASE_URL", raising=False)
        monkeypatch.setenv("API_TITLE", "From Environment")

        load_env_file()

        test_settings = Settings()
        assert test_settings.backend_base_url == "http://from-dotenv"
        assert test_settings.api_title == "From Environment"
