"""Health check and static site"""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..schemas.static import HealthResponse
from ..settings import settings
from ..utils.docs import responses


ENTRY_DOCUMENT = "index.html"

router = APIRouter(tags=["static"])


@router.get("/health", responses=responses(HealthResponse))
async def health() -> Any:
    """Report that the server is up."""

    return {"ok": True}


@router.get("/{path:path}", include_in_schema=False)
async def serve_static(path: str) -> FileResponse:
    root = settings.static_dir.resolve()
    file = (root / path).resolve()
    if not file.is_relative_to(root) or not file.is_file():
        file = root / ENTRY_DOCUMENT

    return FileResponse(file)
