"""
Tests for the media library and zip bundle export.
"""
import io
import zipfile
import pytest

from mediaforge.services import (
    AssetNotFound,
    AssetType,
    AudioAsset,
    BundleExporter,
    DEFAULT_BUNDLE_NAME,
    ImageAsset,
    ScriptAsset,
    WorkflowResult,
)


def _open(archive: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(archive))


class TestMediaLibrary:

    def test_add_and_get(self, library):
        ref = library.add(ImageAsset(data=b"png", scene_index=0))
        assert ref.startswith("asset://")
        assert library.get(ref) == b"png"
        assert library.get(ref[len("asset://"):]) == b"png"

    def test_files_newest_first(self, library):
        library.add(ScriptAsset(text="first"), name="Script 1")
        library.add(AudioAsset(data=b"mp3"), name="Audio 1")

        files = library.files()
        assert [f.name for f in files] == ["Audio 1", "Script 1"]
        assert files[1].content == "first"
        assert files[1].media_type.startswith("text/plain")
        assert [f.name for f in library.files(AssetType.SCRIPT)] == ["Script 1"]

    def test_unknown_reference(self, library):
        with pytest.raises(AssetNotFound):
            library.get("asset://nope")
        with pytest.raises(AssetNotFound):
            library.describe("asset://nope")

    def test_clear_current(self, library):
        library.current_script = "text"
        library.current_image_url = "asset://x"
        library.clear_current()
        assert library.current_script is None
        assert library.current_image_url is None

    def test_remove(self, library):
        kept = library.add(ImageAsset(data=b"keep", scene_index=0))
        dropped = library.add(ImageAsset(data=b"drop", scene_index=1))
        library.current_image_url = dropped

        assert library.remove(dropped) is True
        assert library.remove(dropped) is False
        with pytest.raises(AssetNotFound):
            library.get(dropped)
        assert [f.file_id for f in library.files()] == [kept[len("asset://"):]]
        assert library.current_image_url is None


class TestImageAsset:

    def test_media_type_follows_bytes(self, png_bytes):
        assert ImageAsset(data=png_bytes, scene_index=0).media_type == "image/png"
        assert ImageAsset(data=b"\xff\xd8\xff\xe0\x00\x10JFIF", scene_index=0).media_type == "image/jpeg"
        assert ImageAsset(data=b"RIFF\x24\x00\x00\x00WEBPVP8 ", scene_index=0).media_type == "image/webp"

    def test_listing_reports_jpeg(self, library):
        library.add(ImageAsset(data=b"\xff\xd8\xff\xdbjpeg", scene_index=0))
        assert library.files(AssetType.IMAGE)[0].media_type == "image/jpeg"


@pytest.fixture
def full_result(library, sample_scenes):
    images = [library.add(ImageAsset(data=f"png{i}".encode(), scene_index=i)) for i in range(3)]
    audio = library.add(AudioAsset(data=b"ID3audio", voice_id="v1"))
    return WorkflowResult(
        script="The narration.",
        scene_prompts=list(sample_scenes),
        image_urls=images,
        audio_url=audio,
    )


class TestBundleExporter:

    def test_complete_bundle(self, library, full_result):
        archive = BundleExporter(library).export(full_result)

        with _open(archive) as z:
            assert sorted(z.namelist()) == sorted([
                "script.txt",
                "scene-descriptions.txt",
                "scene-1.png",
                "scene-2.png",
                "scene-3.png",
                "audio.mp3",
            ])
            assert z.read("script.txt").decode() == "The narration."
            assert z.read("scene-2.png") == b"png1"
            assert z.read("audio.mp3") == b"ID3audio"
            assert z.read("scene-descriptions.txt").decode() == (
                "Scene 1: Sunrise\nA red sun rises over a misty lake\n\n"
                "Scene 2: Forest\nTall pines with light beams through fog\n\n"
                "Scene 3: Night\nA starry sky above a quiet campsite"
            )
            assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in z.infolist())

    def test_partial_result(self, library, sample_scenes):
        result = WorkflowResult(script="Only a script.", scene_prompts=list(sample_scenes))

        with _open(BundleExporter(library).export(result)) as z:
            assert sorted(z.namelist()) == ["scene-descriptions.txt", "script.txt"]

    def test_empty_result(self, library):
        with _open(BundleExporter(library).export(WorkflowResult())) as z:
            assert z.namelist() == []

    def test_unresolvable_asset_is_skipped(self, library, full_result):
        full_result.image_urls[1] = "asset://gone"
        full_result.audio_url = "asset://also-gone"

        with _open(BundleExporter(library).export(full_result)) as z:
            names = z.namelist()
        assert "scene-2.png" not in names
        assert "audio.mp3" not in names
        assert "scene-1.png" in names and "scene-3.png" in names

    def test_gap_in_images_keeps_numbering(self, library, full_result):
        full_result.image_urls[0] = None

        with _open(BundleExporter(library).export(full_result)) as z:
            names = z.namelist()
        assert "scene-1.png" not in names
        assert "scene-2.png" in names

    def test_write_to_directory(self, library, full_result, temp_dir):
        path = BundleExporter(library).write(full_result, temp_dir)

        assert path == temp_dir / DEFAULT_BUNDLE_NAME
        with zipfile.ZipFile(path) as z:
            assert "script.txt" in z.namelist()

    def test_write_creates_missing_directory(self, library, full_result, temp_dir):
        out_dir = temp_dir / "output" / "nested"

        path = BundleExporter(library).write(full_result, out_dir)

        assert path == out_dir / DEFAULT_BUNDLE_NAME
        assert path.is_file()
        with zipfile.ZipFile(path) as z:
            assert "audio.mp3" in z.namelist()

    def test_write_to_explicit_zip_path(self, library, full_result, temp_dir):
        target = temp_dir / "exports" / "fox.zip"

        path = BundleExporter(library).write(full_result, target)

        assert path == target
        with zipfile.ZipFile(path) as z:
            assert "script.txt" in z.namelist()
