"""
Workflow Orchestrator - prompt to script, scenes, images and narration.

The run is an explicit state machine:

    IDLE -> SCRIPT_GENERATION -> SCENE_GENERATION -> IMAGE_GENERATION
         -> AUDIO_GENERATION -> COMPLETE

Any working stage may move to FAILED. Stages are awaited strictly in order.
Whatever was accumulated before a failure stays on the run's result, so a
caller can show and export partial output alongside the error.
"""
import uuid
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from collections import OrderedDict
from threading import Lock
from typing import Callable, List, Optional

from mediaforge.config import LENGTH_GUIDES
from mediaforge.providers import (
    ProviderError,
    SceneClient,
    SceneDescriptor,
    ScriptClient,
    VoiceClient,
)
from .assets import AudioAsset, GeneratedAsset, ScriptAsset
from .batch_images import BatchImageGenerator
from .library import MediaLibrary

logger = logging.getLogger(__name__)


class WorkflowStage(str, Enum):
    """Workflow states."""
    IDLE = "idle"
    SCRIPT_GENERATION = "script_generation"
    SCENE_GENERATION = "scene_generation"
    IMAGE_GENERATION = "image_generation"
    AUDIO_GENERATION = "audio_generation"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkflowStage.COMPLETE, WorkflowStage.FAILED)

    @property
    def display_name(self) -> str:
        names = {
            self.IDLE: "Idle",
            self.SCRIPT_GENERATION: "Script generation",
            self.SCENE_GENERATION: "Scene generation",
            self.IMAGE_GENERATION: "Image generation",
            self.AUDIO_GENERATION: "Audio generation",
            self.COMPLETE: "Complete",
            self.FAILED: "Failed",
        }
        return names.get(self, self.value)


_TRANSITIONS = {
    WorkflowStage.IDLE: {WorkflowStage.SCRIPT_GENERATION},
    WorkflowStage.SCRIPT_GENERATION: {WorkflowStage.SCENE_GENERATION, WorkflowStage.FAILED},
    WorkflowStage.SCENE_GENERATION: {WorkflowStage.IMAGE_GENERATION, WorkflowStage.FAILED},
    WorkflowStage.IMAGE_GENERATION: {WorkflowStage.AUDIO_GENERATION, WorkflowStage.FAILED},
    WorkflowStage.AUDIO_GENERATION: {WorkflowStage.COMPLETE, WorkflowStage.FAILED},
    WorkflowStage.COMPLETE: set(),
    WorkflowStage.FAILED: set(),
}


class InvalidTransition(RuntimeError):
    """Raised on a state change the workflow does not allow."""


@dataclass
class WorkflowResult:
    """
    Accumulated output of one run.

    image_urls and audio_url are media library references. video_url is
    reserved and never populated.
    """
    script: Optional[str] = None
    scene_prompts: List[SceneDescriptor] = field(default_factory=list)
    image_urls: List[Optional[str]] = field(default_factory=list)
    audio_url: Optional[str] = None
    video_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "script": self.script,
            "scene_prompts": [s.to_dict() for s in self.scene_prompts],
            "image_urls": list(self.image_urls),
            "audio_url": self.audio_url,
            "video_url": self.video_url,
        }


@dataclass
class WorkflowRun:
    """State + accumulator for one run. Owned by a single orchestrator call."""
    run_id: str
    prompt: str
    length: str = "medium"
    stage: WorkflowStage = WorkflowStage.IDLE
    result: WorkflowResult = field(default_factory=WorkflowResult)
    assets: List[GeneratedAsset] = field(default_factory=list)
    error: Optional[Exception] = None
    failed_stage: Optional[WorkflowStage] = None
    voice_id: Optional[str] = None
    references: List[str] = field(default_factory=list)
    created_at: str = field(default_factory=lambda: datetime.utcnow().isoformat())
    completed_at: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.stage == WorkflowStage.COMPLETE

    def transition(self, stage: WorkflowStage) -> None:
        if stage not in _TRANSITIONS[self.stage]:
            raise InvalidTransition(f"Cannot move from {self.stage.value} to {stage.value}")
        self.stage = stage
        if stage.is_terminal:
            self.completed_at = datetime.utcnow().isoformat()

    def fail(self, error: Exception) -> None:
        self.failed_stage = self.stage
        self.error = error
        self.transition(WorkflowStage.FAILED)

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "prompt": self.prompt,
            "length": self.length,
            "status": "completed" if self.succeeded else self.stage.value,
            "stage": self.stage.value,
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "error": str(self.error) if self.error else None,
            "error_type": type(self.error).__name__ if self.error else None,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
            "result": self.result.to_dict(),
        }


ProgressCallback = Callable[[WorkflowRun], None]


class WorkflowOrchestrator:
    """
    Sequences the generation clients end-to-end.

    run() never raises provider errors: the first error is stored on the
    returned run together with the partial result.

    At most max_runs finished runs are remembered; the oldest one is dropped,
    together with its assets in the library, when a new run starts.
    """

    def __init__(
        self,
        script_client: ScriptClient,
        scene_client: SceneClient,
        batch_images: BatchImageGenerator,
        voice_client: VoiceClient,
        library: Optional[MediaLibrary] = None,
        progress_callbacks: Optional[List[ProgressCallback]] = None,
        max_runs: int = 50,
    ):
        self.script_client = script_client
        self.scene_client = scene_client
        self.batch_images = batch_images
        self.voice_client = voice_client
        self.library = library if library is not None else MediaLibrary()
        self.progress_callbacks = list(progress_callbacks or [])
        self.max_runs = max(1, max_runs)
        self._runs: "OrderedDict[str, WorkflowRun]" = OrderedDict()
        self._runs_lock = Lock()

    def add_progress_callback(self, callback: ProgressCallback) -> None:
        self.progress_callbacks.append(callback)

    def get_run(self, run_id: str) -> Optional[WorkflowRun]:
        with self._runs_lock:
            return self._runs.get(run_id)

    def list_runs(self) -> List[WorkflowRun]:
        with self._runs_lock:
            return list(self._runs.values())

    async def run(self, prompt: str, length: str = "medium") -> WorkflowRun:
        """Run the whole workflow and return the terminal run."""
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")
        if length not in LENGTH_GUIDES:
            raise ValueError(f"Unknown script length: {length}")

        run = WorkflowRun(run_id=uuid.uuid4().hex, prompt=prompt.strip(), length=length)
        with self._runs_lock:
            self._runs[run.run_id] = run
            evicted = self._evict_locked()
        for old in evicted:
            self._forget(old)

        logger.info("=" * 60)
        logger.info(f"WORKFLOW {run.run_id} STARTED")
        logger.info(f"   Prompt: {run.prompt[:100]}")
        logger.info("=" * 60)

        stages = [
            (WorkflowStage.SCRIPT_GENERATION, self._generate_script),
            (WorkflowStage.SCENE_GENERATION, self._generate_scenes),
            (WorkflowStage.IMAGE_GENERATION, self._generate_images),
            (WorkflowStage.AUDIO_GENERATION, self._generate_audio),
        ]

        for stage, step in stages:
            self._advance(run, stage)
            try:
                await step(run)
            except ProviderError as e:
                self._fail(run, e)
                return run
            except Exception as e:
                logger.exception(f"[{stage.display_name}] unexpected error: {e}")
                self._fail(run, e)
                return run

        self._advance(run, WorkflowStage.COMPLETE)
        logger.info(f"WORKFLOW {run.run_id} COMPLETE: {len(run.result.image_urls)} images, audio={'yes' if run.result.audio_url else 'no'}")
        return run

    async def _generate_script(self, run: WorkflowRun) -> None:
        script = await self.script_client.generate_script(run.prompt, run.length)
        asset = ScriptAsset(text=script)
        run.references.append(self.library.add(asset, name=f"Script {datetime.now().strftime('%Y-%m-%d')}"))
        self.library.current_script = script
        run.assets.append(asset)
        run.result.script = script

    async def _generate_scenes(self, run: WorkflowRun) -> None:
        # Scenes come from the user's prompt, not from the generated script.
        scenes = await self.scene_client.generate_scenes(run.prompt)
        run.result.scene_prompts = list(scenes)

    async def _generate_images(self, run: WorkflowRun) -> None:
        images = await self.batch_images.generate(run.result.scene_prompts)
        references = []
        for image in images:
            references.append(self.library.add(image, name=f"Scene {image.scene_index + 1} Image"))
            run.assets.append(image)
        run.references.extend(references)
        run.result.image_urls = references
        if references:
            self.library.current_image_url = references[0]

    async def _generate_audio(self, run: WorkflowRun) -> None:
        voices = await self.voice_client.list_voices()
        if not voices:
            logger.warning("No voices available for this account, skipping narration")
            return
        voice = voices[0]
        run.voice_id = voice.voice_id
        audio = await self.voice_client.synthesize(run.result.script, voice.voice_id)
        asset = AudioAsset(data=audio, voice_id=voice.voice_id)
        reference = self.library.add(asset, name=f"Audio {datetime.now().strftime('%Y-%m-%d')}")
        self.library.current_audio_url = reference
        run.references.append(reference)
        run.assets.append(asset)
        run.result.audio_url = reference

    def _evict_locked(self) -> List[WorkflowRun]:
        """Pop the oldest finished runs beyond max_runs. Caller holds _runs_lock."""
        evicted = []
        for run_id in list(self._runs):
            if len(self._runs) <= self.max_runs:
                break
            if self._runs[run_id].stage.is_terminal:
                evicted.append(self._runs.pop(run_id))
        return evicted

    def _forget(self, run: WorkflowRun) -> None:
        for reference in run.references:
            self.library.remove(reference)
        logger.info(f"Dropped run {run.run_id} and {len(run.references)} assets")

    def _advance(self, run: WorkflowRun, stage: WorkflowStage) -> None:
        run.transition(stage)
        logger.info(f"[{run.run_id[:8]}] -> {stage.display_name}")
        self._notify(run)

    def _fail(self, run: WorkflowRun, error: Exception) -> None:
        run.fail(error)
        logger.error(f"WORKFLOW {run.run_id} FAILED at {run.failed_stage.display_name}: {error}")
        self._notify(run)

    def _notify(self, run: WorkflowRun) -> None:
        for callback in self.progress_callbacks:
            try:
                callback(run)
            except Exception as e:
                logger.error(f"Progress callback failed: {e}")
