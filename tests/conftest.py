"""
Pytest configuration and fixtures for MediaForge tests.
"""
import os
import pytest
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import httpx

# Set test environment before importing mediaforge modules
os.environ["DEBUG"] = "true"
for _key in ("GEMINI_API_KEY", "ELEVENLABS_API_KEY", "HUGGINGFACE_API_KEY", "MEDIAFORGE_CREDENTIALS_FILE"):
    os.environ.pop(_key, None)

TEST_KEYS = {
    "gemini": "gem-test-key-0123456789",
    "elevenlabs": "el-test-key-0123456789",
    "huggingface": "hf_test_key_0123456789",
}

PNG_BYTES = (
    b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01'
    b'\x00\x00\x00\x01\x08\x02\x00\x00\x00\x90wS\xde\x00\x00'
    b'\x00\x0cIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18'
    b'\xd8N\x00\x00\x00\x00IEND\xaeB`\x82'
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings():
    """Provider settings with the stock endpoints and models."""
    from mediaforge.config import ProviderSettings
    return ProviderSettings()


@pytest.fixture
def credentials():
    """Credential manager holding a key for every provider."""
    from mediaforge.credentials import CredentialManager, InMemoryCredentialStore
    return CredentialManager(InMemoryCredentialStore(dict(TEST_KEYS)))


@pytest.fixture
def empty_credentials():
    """Credential manager with no keys at all."""
    from mediaforge.credentials import CredentialManager, InMemoryCredentialStore
    return CredentialManager(InMemoryCredentialStore())


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx client for async HTTP tests."""
    client = AsyncMock()
    client.post = AsyncMock()
    client.get = AsyncMock()
    client.head = AsyncMock(return_value=httpx.Response(200))
    return client


@pytest.fixture
def gemini_reply():
    """Build a Gemini generateContent response carrying the given text."""
    def _reply(text: str, status_code: int = 200) -> httpx.Response:
        return httpx.Response(
            status_code,
            json={"candidates": [{"content": {"parts": [{"text": text}]}}]},
        )
    return _reply


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def image_reply():
    """Build a successful Hugging Face image response."""
    def _reply(data: bytes = PNG_BYTES) -> httpx.Response:
        return httpx.Response(200, content=data, headers={"content-type": "image/png"})
    return _reply


@pytest.fixture
def sample_scenes():
    """Three scene descriptors."""
    from mediaforge.providers import SceneDescriptor
    return [
        SceneDescriptor("Sunrise", "A red sun rises over a misty lake"),
        SceneDescriptor("Forest", "Tall pines with light beams through fog"),
        SceneDescriptor("Night", "A starry sky above a quiet campsite"),
    ]


@pytest.fixture
def scenes_json():
    """Model output embedding the three sample scenes in prose and a code fence."""
    return (
        "Here are your scenes:\n```json\n"
        '[{"scene": "Sunrise", "description": "A red sun rises over a misty lake"},'
        ' {"scene": "Forest", "description": "Tall pines with light beams through fog"},'
        ' {"scene": "Night", "description": "A starry sky above a quiet campsite"}]\n'
        "```\nEnjoy!"
    )


@pytest.fixture
def library():
    from mediaforge.services import MediaLibrary
    return MediaLibrary()


# FastAPI test client fixture
@pytest.fixture
def test_client():
    """Create a test client for API testing."""
    from fastapi.testclient import TestClient
    from mediaforge.api.main import app
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
