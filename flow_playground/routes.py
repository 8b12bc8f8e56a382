"""HTTP endpoint serving project exports as zip downloads."""

from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from .services import (
    CodeFormattingError,
    ProjectExporter,
    ProjectNotFoundError,
    ProjectRepository,
    ScaffoldFetchError,
)
from .services.exporter import project_name


logger = logging.getLogger(__name__)


async def build_export_response(
    project_id: str,
    repository: ProjectRepository,
    exporter: ProjectExporter,
) -> Response:
    if not ProjectRepository.is_valid_project_id(project_id):
        return PlainTextResponse("Invalid project id.", status_code=404)
    try:
        project = repository.load(project_id)
    except ProjectNotFoundError:
        return PlainTextResponse("Project not found.", status_code=404)

    try:
        archive = await exporter.export_project(project)
    except ScaffoldFetchError as exc:
        logger.exception("Scaffold fetch failed while exporting project %s", project_id)
        return PlainTextResponse(str(exc), status_code=502)
    except CodeFormattingError as exc:
        logger.exception("Formatting failed while exporting project %s", project_id)
        return PlainTextResponse(str(exc), status_code=500)

    filename = f"{project_name(project)}.zip"
    return Response(
        archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def make_export_route(repository: ProjectRepository, exporter: ProjectExporter):
    async def export_project_route(request: Request) -> Response:
        raw = request.path_params.get("project_id", "")
        return await build_export_response(raw, repository, exporter)

    return export_project_route
