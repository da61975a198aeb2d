"""
Working example: run the full workflow without the API server.

    python run_example.py "a fox exploring a snowy forest" --length short --out ./output

Keys come from GEMINI_API_KEY, ELEVENLABS_API_KEY and HUGGINGFACE_API_KEY
(or MEDIAFORGE_CREDENTIALS_FILE). The bundle is written even when a stage
fails, with whatever was generated before the failure.
"""
import argparse
import asyncio
import logging
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

from mediaforge.config import config, LENGTH_GUIDES
from mediaforge.credentials import build_credential_manager
from mediaforge.providers import ImageClient, SceneClient, ScriptClient, VoiceClient
from mediaforge.services import (
    BatchImageGenerator,
    BundleExporter,
    MediaLibrary,
    WorkflowOrchestrator,
    WorkflowRun,
)


def on_progress(run: WorkflowRun):
    """Progress callback."""
    print(f"  -> {run.stage.display_name}", flush=True)


async def run_workflow(prompt: str, length: str, out_dir: Path) -> WorkflowRun:
    credentials = build_credential_manager(config.credentials_file)
    settings = config.providers
    library = MediaLibrary()

    clients = [
        ScriptClient(credentials, settings),
        SceneClient(credentials, settings),
        ImageClient(credentials, settings),
        VoiceClient(credentials, settings),
    ]
    script_client, scene_client, image_client, voice_client = clients

    orchestrator = WorkflowOrchestrator(
        script_client=script_client,
        scene_client=scene_client,
        batch_images=BatchImageGenerator(image_client, max_concurrency=config.image_concurrency),
        voice_client=voice_client,
        library=library,
        progress_callbacks=[on_progress],
    )

    try:
        run = await orchestrator.run(prompt, length)
    finally:
        for client in clients:
            await client.aclose()

    bundle_path = BundleExporter(library).write(run.result, out_dir)
    print(f"Bundle: {bundle_path}")
    return run


def main():
    """Run example workflow."""
    parser = argparse.ArgumentParser(description="Generate script, scene images and narration")
    parser.add_argument("prompt", help="Video idea")
    parser.add_argument("--length", choices=sorted(LENGTH_GUIDES), default="medium")
    parser.add_argument("--out", type=Path, default=Path("output"), help="Directory for the zip bundle")
    args = parser.parse_args()

    print("=" * 60)
    print("MEDIAFORGE WORKFLOW")
    print("=" * 60)
    config.log_status()

    run = asyncio.run(run_workflow(args.prompt, args.length, args.out))

    print("-" * 60)
    if run.succeeded:
        print("\nSUCCESS!")
        print(f"Script: {len(run.result.script.split())} words")
        print(f"Images: {len(run.result.image_urls)}")
    else:
        print(f"\nFAILED at {run.failed_stage.display_name}: {run.error}")

    return run


if __name__ == "__main__":
    main()
