"""
Tests for configuration management.
"""
import pytest


class TestProviderSettings:
    """Tests for ProviderSettings defaults and validation."""

    def test_defaults(self):
        """Stock models and voice settings."""
        from mediaforge.config import ProviderSettings

        settings = ProviderSettings()
        assert settings.script_model == "gemini-pro"
        assert settings.scene_model == "gemini-2.0-flash"
        assert settings.image_models == [
            "stabilityai/stable-diffusion-xl-base-1.0",
            "runwayml/stable-diffusion-v1-5",
            "prompthero/openjourney",
        ]
        assert settings.voice_model == "eleven_multilingual_v2"
        assert settings.voice_stability == 0.5
        assert settings.voice_similarity_boost == 0.75
        assert settings.scene_count == 3

    def test_image_models_not_shared_between_instances(self):
        from mediaforge.config import ProviderSettings

        a = ProviderSettings()
        a.image_models.append("custom/model")
        assert "custom/model" not in ProviderSettings().image_models

    def test_rejects_zero_scenes(self):
        from mediaforge.config import ProviderSettings

        with pytest.raises(ValueError):
            ProviderSettings(scene_count=0)

    def test_rejects_empty_model_list(self):
        from mediaforge.config import ProviderSettings

        with pytest.raises(ValueError):
            ProviderSettings(image_models=[])


class TestLoadConfig:
    """Tests for load_config()."""

    def test_env_overrides(self, monkeypatch, temp_dir):
        monkeypatch.setenv("GEMINI_SCRIPT_MODEL", "gemini-1.5-pro")
        monkeypatch.setenv("HUGGINGFACE_IMAGE_MODELS", "a/one, b/two ,")
        monkeypatch.setenv("MEDIAFORGE_SCENE_COUNT", "5")
        monkeypatch.setenv("MEDIAFORGE_IMAGE_CONCURRENCY", "3")
        monkeypatch.setenv("MEDIAFORGE_MAX_RUNS", "7")
        monkeypatch.setenv("MEDIAFORGE_CREDENTIALS_FILE", str(temp_dir / "keys.json"))

        from mediaforge.config import load_config

        config = load_config()
        assert config.providers.script_model == "gemini-1.5-pro"
        assert config.providers.image_models == ["a/one", "b/two"]
        assert config.providers.scene_count == 5
        assert config.image_concurrency == 3
        assert config.max_runs == 7
        assert config.validate()["workflow"]["max_runs"] == 7
        assert config.credentials_file == temp_dir / "keys.json"

    def test_blank_model_list_falls_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("HUGGINGFACE_IMAGE_MODELS", " , ")

        from mediaforge.config import load_config, DEFAULT_IMAGE_MODELS

        assert load_config().providers.image_models == DEFAULT_IMAGE_MODELS

    def test_concurrency_is_at_least_one(self, monkeypatch):
        monkeypatch.setenv("MEDIAFORGE_IMAGE_CONCURRENCY", "0")

        from mediaforge.config import load_config

        assert load_config().image_concurrency == 1

    def test_max_runs_default_and_floor(self, monkeypatch):
        from mediaforge.config import load_config

        monkeypatch.delenv("MEDIAFORGE_MAX_RUNS", raising=False)
        assert load_config().max_runs == 50

        monkeypatch.setenv("MEDIAFORGE_MAX_RUNS", "0")
        assert load_config().max_runs == 1

    def test_validate_contains_no_secrets(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gem-secret-value-123")

        from mediaforge.config import load_config

        status = load_config().validate()
        assert "gem-secret-value-123" not in str(status)
        assert status["workflow"]["scene_count"] == 3
