"""
Workflow endpoints: run the full pipeline, inspect a run, download its bundle.

A failed run is still a 200 response: status "failed", the stage it stopped
at, the error and whatever was generated before the failure.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from mediaforge.services import (
    DEFAULT_BUNDLE_NAME,
    BundleExporter,
    WorkflowOrchestrator,
)
from ..dependencies import get_bundle_exporter, get_orchestrator
from ..exceptions import RunNotFoundError, ValidationError
from ..schemas import WorkflowRequest, WorkflowResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/workflow", tags=["Workflow"])


@router.post("", response_model=WorkflowResponse)
async def run_workflow(
    request: WorkflowRequest,
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """
    Generate script, scene descriptions, scene images and narration.

    Blocks until the run reaches COMPLETE or FAILED.
    """
    try:
        run = await orchestrator.run(request.prompt, request.length.value)
    except ValueError as e:
        raise ValidationError(str(e))
    return run.to_dict()


@router.get("/{run_id}", response_model=WorkflowResponse)
async def get_workflow(
    run_id: str,
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
):
    """Outcome of a previous run."""
    run = orchestrator.get_run(run_id)
    if run is None:
        raise RunNotFoundError(run_id)
    return run.to_dict()


@router.get("/{run_id}/bundle")
async def download_bundle(
    run_id: str,
    orchestrator: WorkflowOrchestrator = Depends(get_orchestrator),
    exporter: BundleExporter = Depends(get_bundle_exporter),
):
    """Zip archive of everything the run produced, partial runs included."""
    run = orchestrator.get_run(run_id)
    if run is None:
        raise RunNotFoundError(run_id)

    archive = exporter.export(run.result)
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{DEFAULT_BUNDLE_NAME}"'},
    )
