"""HTTP interface to an export session.

The application serves the single-page UI and a small JSON API. Every API
error is reported as ``{"error": message}`` with a status code matching the
error kind.
"""

import logging
from importlib.resources import files
from typing import Dict, List, Optional, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from projexport import __version__
from projexport.config import ExporterConfig
from projexport.exceptions import (
    EmptySelectionError,
    FileReadError,
    InvalidExportNameError,
    InvalidPathError,
    NodeNotFoundError,
    PathOutsideRootError,
    ProjectExportError,
    ProjectNotLoadedError,
)
from projexport.session import ExportSession

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: Dict[Type[ProjectExportError], int] = {
    InvalidPathError: 400,
    EmptySelectionError: 400,
    InvalidExportNameError: 400,
    ProjectNotLoadedError: 400,
    PathOutsideRootError: 403,
    NodeNotFoundError: 404,
    FileReadError: 422,
}


class LoadRequest(BaseModel):
    path: str
    exclusions: List[str] = Field(default_factory=list)


class SelectRequest(BaseModel):
    path: str
    selected: bool


class FileContentRequest(BaseModel):
    path: str = ""


class ExportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    custom_name: Optional[str] = Field(default=None, alias="customName")


def error_status_code(error: ProjectExportError) -> int:
    for error_type in type(error).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return 500


def load_index_html() -> str:
    return files("projexport.web").joinpath("static/index.html").read_text(encoding="utf-8")


def create_app(session: Optional[ExportSession] = None, config: Optional[ExporterConfig] = None) -> FastAPI:
    """Build the web application around a session.

    Args:
        session: Session served by the application. A new one is created from
            ``config`` when omitted.
        config: Configuration for a new session. Ignored when ``session`` is given.

    Returns:
        The FastAPI application. The session is available as ``app.state.session``.
    """
    if session is None:
        session = ExportSession(config)

    app = FastAPI(title="Project Exporter", version=__version__)
    app.state.session = session
    index_html = load_index_html()

    @app.exception_handler(ProjectExportError)
    async def handle_export_error(request: Request, exc: ProjectExportError) -> JSONResponse:
        return JSONResponse(status_code=error_status_code(exc), content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
        return JSONResponse(status_code=422, content={"error": "; ".join(messages)})

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return index_html

    @app.get("/api/config")
    def get_config() -> dict:
        return {
            "defaultExclusions": list(session.config.default_exclusions),
            "projectPath": session.project_path,
            "outputDirectory": str(session.config.output_dir.resolve()),
        }

    @app.post("/api/load")
    def load_project(request: LoadRequest) -> dict:
        result = session.load(request.path, request.exclusions)
        return {
            "tree": result.tree.to_dict(),
            "scanErrors": [{"path": error.relative_path, "message": error.message} for error in result.scan_errors],
        }

    @app.post("/api/select")
    def select(request: SelectRequest) -> dict:
        session.set_selected(request.path, request.selected)
        return {"success": True}

    @app.get("/api/count")
    def count() -> dict:
        return {"fileCount": session.selected_file_count()}

    @app.post("/api/file-content")
    def file_content(request: FileContentRequest) -> dict:
        return {"content": session.get_file_content(request.path)}

    @app.post("/api/export")
    def export(request: ExportRequest) -> JSONResponse:
        try:
            result = session.export_to_text(request.custom_name)
        except OSError as e:
            logger.error("Export failed: %s", e)
            return JSONResponse(status_code=500, content={"error": f"Export failed: {e}"})
        return JSONResponse(content=result.to_dict())

    return app
