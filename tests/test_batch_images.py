"""
Tests for per-scene model fallback.
"""
import httpx
import pytest
from unittest.mock import AsyncMock

from mediaforge.providers import (
    CredentialInvalid,
    ImageClient,
    SceneGenerationFailed,
    UpstreamError,
)
from mediaforge.services import BatchImageGenerator, Exhausted, Generated

MODELS = ["model/a", "model/b", "model/c"]


def _failure(model):
    return httpx.Response(503, json={"error": f"{model} is currently loading"})


def _route(image_reply, failing_models=(), failing_prompts=()):
    """post() side effect: fail for the given models or scene prompts."""
    async def _post(url, **kwargs):
        model = url.split("/models/", 1)[1]
        if model in failing_models or kwargs["json"]["inputs"] in failing_prompts:
            return _failure(model)
        return image_reply(f"{model}|{kwargs['json']['inputs']}".encode())
    return _post


@pytest.fixture
def image_client(credentials, mock_httpx_client):
    return ImageClient(credentials, client=mock_httpx_client)


class TestBatchImageGenerator:

    @pytest.mark.asyncio
    async def test_one_image_per_scene_in_order(self, image_client, mock_httpx_client, image_reply, sample_scenes):
        mock_httpx_client.post.side_effect = _route(image_reply)
        generator = BatchImageGenerator(image_client, models=MODELS)

        images = await generator.generate(sample_scenes)

        assert [img.scene_index for img in images] == [0, 1, 2]
        assert [img.data.decode() for img in images] == [
            f"model/a|{scene.description}" for scene in sample_scenes
        ]
        assert mock_httpx_client.head.call_count == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_next_model(self, image_client, mock_httpx_client, image_reply, sample_scenes):
        mock_httpx_client.post.side_effect = _route(image_reply, failing_models={"model/a"})
        generator = BatchImageGenerator(image_client, models=MODELS)

        images = await generator.generate(sample_scenes)

        assert all(img.model == "model/b" for img in images)
        # a then b for each scene, never c
        called = [call.args[0].split("/models/", 1)[1] for call in mock_httpx_client.post.call_args_list]
        assert called == ["model/a", "model/b"] * 3

    @pytest.mark.asyncio
    async def test_exhausted_scene_fails_batch(self, image_client, mock_httpx_client, image_reply, sample_scenes):
        """Scenes [A, B, C] with every model failing on B: index 1, C never attempted."""
        mock_httpx_client.post.side_effect = _route(
            image_reply, failing_prompts={sample_scenes[1].description}
        )
        generator = BatchImageGenerator(image_client, models=MODELS)

        with pytest.raises(SceneGenerationFailed) as exc_info:
            await generator.generate(sample_scenes)

        assert exc_info.value.scene_index == 1
        assert len(exc_info.value.errors) == 3
        prompts = [call.kwargs["json"]["inputs"] for call in mock_httpx_client.post.call_args_list]
        assert sample_scenes[2].description not in prompts
        assert len(prompts) == 1 + 3

    @pytest.mark.asyncio
    async def test_probe_failure_stops_before_generation(self, image_client, mock_httpx_client, sample_scenes):
        mock_httpx_client.head.return_value = httpx.Response(403)
        generator = BatchImageGenerator(image_client, models=MODELS)

        with pytest.raises(CredentialInvalid):
            await generator.generate(sample_scenes)
        mock_httpx_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_scene_list(self, image_client, mock_httpx_client):
        generator = BatchImageGenerator(image_client, models=MODELS)
        assert await generator.generate([]) == []
        mock_httpx_client.head.assert_not_called()

    @pytest.mark.asyncio
    async def test_models_default_to_settings(self, image_client):
        generator = BatchImageGenerator(image_client)
        assert generator.models == image_client.settings.image_models

    @pytest.mark.asyncio
    async def test_generate_scene_outcomes(self, sample_scenes):
        client = AsyncMock()
        client.generate_image = AsyncMock(side_effect=[
            UpstreamError("Hugging Face", "boom"),
            b"image",
        ])
        client.settings.image_models = MODELS
        generator = BatchImageGenerator(client, models=MODELS)

        outcome = await generator.generate_scene(0, sample_scenes[0])
        assert isinstance(outcome, Generated)
        assert outcome.asset.model == "model/b"

        client.generate_image = AsyncMock(side_effect=UpstreamError("Hugging Face", "boom"))
        outcome = await generator.generate_scene(2, sample_scenes[2])
        assert isinstance(outcome, Exhausted)
        assert outcome.scene_index == 2
        assert len(outcome.errors) == 3


class TestConcurrentBatch:

    @pytest.mark.asyncio
    async def test_preserves_order(self, image_client, mock_httpx_client, image_reply, sample_scenes):
        mock_httpx_client.post.side_effect = _route(image_reply, failing_models={"model/a"})
        generator = BatchImageGenerator(image_client, models=MODELS, max_concurrency=3)

        images = await generator.generate(sample_scenes)

        assert [img.scene_index for img in images] == [0, 1, 2]
        assert [img.data.decode() for img in images] == [
            f"model/b|{scene.description}" for scene in sample_scenes
        ]

    @pytest.mark.asyncio
    async def test_reports_lowest_failing_scene(self, image_client, mock_httpx_client, image_reply, sample_scenes):
        mock_httpx_client.post.side_effect = _route(
            image_reply,
            failing_prompts={sample_scenes[1].description, sample_scenes[2].description},
        )
        generator = BatchImageGenerator(image_client, models=MODELS, max_concurrency=2)

        with pytest.raises(SceneGenerationFailed) as exc_info:
            await generator.generate(sample_scenes)
        assert exc_info.value.scene_index == 1
