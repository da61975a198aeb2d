"""
Services Layer.

Multi-step operations built on the provider clients:
- BatchImageGenerator: one image per scene with model fallback
- WorkflowOrchestrator: prompt -> script -> scenes -> images -> narration
- MediaLibrary: generated files and current selections
- BundleExporter: zip archive of a workflow result
"""
from .assets import AssetType, ScriptAsset, ImageAsset, AudioAsset, GeneratedAsset
from .library import MediaLibrary, MediaFile, AssetNotFound, REFERENCE_PREFIX
from .batch_images import BatchImageGenerator, Generated, Exhausted, FallbackOutcome
from .workflow import (
    WorkflowStage,
    WorkflowResult,
    WorkflowRun,
    WorkflowOrchestrator,
    InvalidTransition,
)
from .bundle import BundleExporter, DEFAULT_BUNDLE_NAME, format_scene_descriptions

__all__ = [
    # Assets
    "AssetType",
    "ScriptAsset",
    "ImageAsset",
    "AudioAsset",
    "GeneratedAsset",

    # Library
    "MediaLibrary",
    "MediaFile",
    "AssetNotFound",
    "REFERENCE_PREFIX",

    # Images
    "BatchImageGenerator",
    "Generated",
    "Exhausted",
    "FallbackOutcome",

    # Workflow
    "WorkflowStage",
    "WorkflowResult",
    "WorkflowRun",
    "WorkflowOrchestrator",
    "InvalidTransition",

    # Export
    "BundleExporter",
    "DEFAULT_BUNDLE_NAME",
    "format_scene_descriptions",
]
