"""
Application Configuration - Environment Variable Management.
Loads provider endpoints, model names and workflow limits from .env.
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
    logger.info(f"Loaded environment from {ENV_FILE}")
else:
    logger.debug(f".env file not found at {ENV_FILE}")


DEFAULT_IMAGE_MODELS = [
    "stabilityai/stable-diffusion-xl-base-1.0",
    "runwayml/stable-diffusion-v1-5",
    "prompthero/openjourney",
]

LENGTH_GUIDES = {
    "short": "about 50 words",
    "medium": "about 100-150 words",
    "long": "about 250-300 words",
}


@dataclass
class ProviderSettings:
    """Endpoints, models and request parameters for the three AI providers."""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    script_model: str = "gemini-pro"
    scene_model: str = "gemini-2.0-flash"

    huggingface_base_url: str = "https://api-inference.huggingface.co"
    image_models: List[str] = field(default_factory=lambda: list(DEFAULT_IMAGE_MODELS))

    elevenlabs_base_url: str = "https://api.elevenlabs.io"
    voice_model: str = "eleven_multilingual_v2"
    voice_stability: float = 0.5
    voice_similarity_boost: float = 0.75

    scene_count: int = 3
    request_timeout: float = 120.0

    def __post_init__(self):
        if self.scene_count < 1:
            raise ValueError("scene_count must be at least 1")
        if not self.image_models:
            raise ValueError("At least one image model is required")


@dataclass
class AppConfig:
    """Main Application Configuration."""
    providers: ProviderSettings
    credentials_file: Optional[Path] = None
    image_concurrency: int = 1
    max_runs: int = 50
    debug: bool = False

    def validate(self) -> dict:
        """Return configuration status (never includes secrets)."""
        return {
            "providers": {
                "script_model": self.providers.script_model,
                "scene_model": self.providers.scene_model,
                "image_models": list(self.providers.image_models),
                "voice_model": self.providers.voice_model,
            },
            "workflow": {
                "scene_count": self.providers.scene_count,
                "image_concurrency": self.image_concurrency,
                "max_runs": self.max_runs,
            },
            "credentials_file": str(self.credentials_file) if self.credentials_file else None,
        }

    def log_status(self):
        """Log configuration status (without exposing keys)."""
        status = self.validate()

        logger.info("=" * 50)
        logger.info("Configuration Status:")
        logger.info(f"  Script model: {status['providers']['script_model']}")
        logger.info(f"  Scene model: {status['providers']['scene_model']}")
        logger.info(f"  Image models: {', '.join(status['providers']['image_models'])}")
        logger.info(f"  Voice model: {status['providers']['voice_model']}")
        logger.info(f"  Scenes per run: {status['workflow']['scene_count']}")
        logger.info(f"  Runs kept in memory: {status['workflow']['max_runs']}")
        logger.info(f"  Credentials file: {status['credentials_file'] or 'environment only'}")
        logger.info("=" * 50)


def _parse_models(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_IMAGE_MODELS)
    models = [m.strip() for m in raw.split(",") if m.strip()]
    return models or list(DEFAULT_IMAGE_MODELS)


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    providers = ProviderSettings(
        gemini_base_url=os.getenv("GEMINI_BASE_URL", ProviderSettings.gemini_base_url),
        script_model=os.getenv("GEMINI_SCRIPT_MODEL", ProviderSettings.script_model),
        scene_model=os.getenv("GEMINI_SCENE_MODEL", ProviderSettings.scene_model),
        huggingface_base_url=os.getenv("HUGGINGFACE_BASE_URL", ProviderSettings.huggingface_base_url),
        image_models=_parse_models(os.getenv("HUGGINGFACE_IMAGE_MODELS")),
        elevenlabs_base_url=os.getenv("ELEVENLABS_BASE_URL", ProviderSettings.elevenlabs_base_url),
        voice_model=os.getenv("ELEVENLABS_MODEL", ProviderSettings.voice_model),
        scene_count=int(os.getenv("MEDIAFORGE_SCENE_COUNT", "3")),
        request_timeout=float(os.getenv("MEDIAFORGE_REQUEST_TIMEOUT", "120")),
    )

    credentials_file = os.getenv("MEDIAFORGE_CREDENTIALS_FILE")

    return AppConfig(
        providers=providers,
        credentials_file=Path(credentials_file) if credentials_file else None,
        image_concurrency=max(1, int(os.getenv("MEDIAFORGE_IMAGE_CONCURRENCY", "1"))),
        max_runs=max(1, int(os.getenv("MEDIAFORGE_MAX_RUNS", "50"))),
        debug=os.getenv("DEBUG", "false").lower() == "true",
    )


# Global config instance
config = load_config()
