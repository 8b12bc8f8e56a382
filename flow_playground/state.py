from __future__ import annotations

import logging
import os
import time
from typing import Dict, List

import reflex as rx

from .services import (
    CodeFormattingError,
    ProjectExporter,
    ProjectNotFoundError,
    ProjectRepository,
    ScaffoldFetchError,
)
from .services.exporter import project_name


def _env_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw, 0)
    except ValueError:
        return default
    return value if value > 0 else default


ACTIVITY_LOG_MAX_ENTRIES = _env_positive_int("PLAYGROUND_ACTIVITY_LOG_MAX_ENTRIES", 50)
LOG_LEVEL_COLORS = {
    "info": "#3b82f6",
    "success": "#10b981",
    "error": "#ef4444",
    "warning": "#f59e0b",
}

logger = logging.getLogger(__name__)

project_repository = ProjectRepository()
project_exporter = ProjectExporter()


class ExportState(rx.State):
    """Reflex state driving project export and test previews."""

    project_id: str = ""
    project_error: str = ""
    export_message: str = ""
    export_is_error: bool = False
    exporting: bool = False
    test_preview: str = ""
    log_entries: List[Dict[str, str]] = []

    def update_project_id(self, value: str):
        self.project_id = (value or "").strip().lower()
        self.project_error = ""

    def create_project(self):
        project = project_repository.create()
        self.project_id = project.id
        self.project_error = ""
        self._log_event("success", "create", f"Project {project.id} created.")
        return [rx.toast.success("New project created.")]

    def _require_project(self):
        if not ProjectRepository.is_valid_project_id(self.project_id):
            self.project_error = "Project ID must be a UUID."
            return None
        try:
            return project_repository.load(self.project_id)
        except ProjectNotFoundError:
            self.project_error = "Project not found."
            return None

    def _log_event(self, level: str, action: str, message: str, detail: str = "") -> None:
        normalized_level = (level or "").lower() or "info"
        detail = (detail or "").strip()
        if len(detail) > 4000:
            detail = detail[:4000] + "…"
        entry = {
            "timestamp": time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
            "level": normalized_level,
            "level_label": normalized_level.title(),
            "action": action,
            "message": message,
            "detail": detail,
            "color": LOG_LEVEL_COLORS.get(normalized_level, LOG_LEVEL_COLORS["info"]),
        }
        entries = self.log_entries + [entry]
        if len(entries) > ACTIVITY_LOG_MAX_ENTRIES:
            entries = entries[-ACTIVITY_LOG_MAX_ENTRIES:]
        self.log_entries = entries

    def _log_failure(self, action: str, prefix: str, exc: Exception) -> str:
        logger.exception("%s failed for project %s", action, self.project_id)
        message = f"{prefix}{exc}"
        self._log_event("error", action, message, detail=exc.__class__.__name__)
        return message

    def clear_logs(self):
        self.log_entries = []
        return [rx.toast.success("Activity log cleared.")]

    async def export_project(self):
        if self.exporting:
            return []
        project = self._require_project()
        if project is None:
            return [rx.toast.error(self.project_error)]

        self.exporting = True
        try:
            archive = await project_exporter.export_project(project)
        except ScaffoldFetchError as exc:
            self.export_is_error = True
            self.export_message = self._log_failure("export", "Could not fetch project files: ", exc)
            return [rx.toast.error(self.export_message)]
        except CodeFormattingError as exc:
            self.export_is_error = True
            self.export_message = self._log_failure("export", "Generated tests are invalid: ", exc)
            return [rx.toast.error(self.export_message)]
        except Exception as exc:
            self.export_is_error = True
            self.export_message = self._log_failure("export", "Export failed: ", exc)
            return [rx.toast.error(self.export_message)]
        finally:
            self.exporting = False

        self.export_is_error = False
        self.export_message = f"Project exported ({len(archive)} bytes)."
        self._log_event("success", "export", self.export_message)
        return [
            rx.download(data=archive, filename=f"{project_name(project)}.zip"),
            rx.toast.success(self.export_message),
        ]

    async def preview_tests(self):
        project = self._require_project()
        if project is None:
            return [rx.toast.error(self.project_error)]
        try:
            bundle = await project_exporter.build_bundle(project)
        except Exception as exc:
            message = self._log_failure("preview", "Preview failed: ", exc)
            return [rx.toast.error(message)]
        self.test_preview = bundle.get("test/index.test.js") or ""
        self._log_event("info", "preview", "Generated test file refreshed.")
        return []
