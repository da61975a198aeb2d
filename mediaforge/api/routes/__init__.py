"""
API Routes.
"""
from .health import router as health_router
from .keys import router as keys_router
from .generation import router as generation_router
from .workflow import router as workflow_router
from .files import router as files_router

__all__ = [
    "health_router",
    "keys_router",
    "generation_router",
    "workflow_router",
    "files_router",
]
