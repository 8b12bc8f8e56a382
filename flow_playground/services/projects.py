"""Filesystem-backed project snapshots."""

from __future__ import annotations

import json
import os
import shutil
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List

from ..defaults import (
    DEFAULT_CONTRACT,
    DEFAULT_SCRIPT,
    DEFAULT_SCRIPT_TITLE,
    DEFAULT_TRANSACTION,
    DEFAULT_TRANSACTION_TITLE,
)


PROJECT_FILE_NAME = "project.json"
PROJECTS_ROOT = os.getenv("PLAYGROUND_PROJECTS_ROOT")


class ProjectNotFoundError(FileNotFoundError):
    """Raised when a project directory/snapshot cannot be found."""


@dataclass(slots=True)
class Account:
    address: str
    draft_code: str = ""


@dataclass(slots=True)
class Template:
    title: str
    script: str = ""


@dataclass(slots=True)
class Project:
    id: str
    accounts: List[Account] = field(default_factory=list)
    transaction_templates: List[Template] = field(default_factory=list)
    script_templates: List[Template] = field(default_factory=list)

    @classmethod
    def new(cls, project_id: str) -> "Project":
        return cls(
            id=project_id,
            accounts=[
                Account(address="0x01", draft_code=DEFAULT_CONTRACT),
                Account(address="0x02"),
                Account(address="0x03"),
                Account(address="0x04"),
            ],
            transaction_templates=[
                Template(title=DEFAULT_TRANSACTION_TITLE, script=DEFAULT_TRANSACTION),
            ],
            script_templates=[
                Template(title=DEFAULT_SCRIPT_TITLE, script=DEFAULT_SCRIPT),
            ],
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        if not isinstance(data, dict):
            raise ValueError("Project snapshot must be a JSON object.")
        return cls(
            id=str(data["id"]),
            accounts=[
                Account(address=str(item["address"]), draft_code=item.get("draftCode") or "")
                for item in data.get("accounts", [])
            ],
            transaction_templates=[
                Template(title=str(item["title"]), script=item.get("script") or "")
                for item in data.get("transactionTemplates", [])
            ],
            script_templates=[
                Template(title=str(item["title"]), script=item.get("script") or "")
                for item in data.get("scriptTemplates", [])
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "accounts": [
                {"address": item.address, "draftCode": item.draft_code}
                for item in self.accounts
            ],
            "transactionTemplates": [
                {"title": item.title, "script": item.script}
                for item in self.transaction_templates
            ],
            "scriptTemplates": [
                {"title": item.title, "script": item.script}
                for item in self.script_templates
            ],
        }


class ProjectRepository:
    """Manage project snapshots stored on disk, one directory per project."""

    def __init__(self, root: Path | None = None):
        if root is None:
            root = Path(PROJECTS_ROOT) if PROJECTS_ROOT else Path(__file__).resolve().parent.parent / ".projects"
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.RLock] = {}
        self._locks_lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    @staticmethod
    def normalize_project_id(project_id: str | None) -> str | None:
        if not project_id:
            return None
        try:
            return uuid.UUID(project_id.strip()).hex
        except ValueError:
            return None

    @staticmethod
    def is_valid_project_id(project_id: str | None) -> bool:
        return ProjectRepository.normalize_project_id(project_id) is not None

    def _project_path(self, project_id: str) -> Path:
        return self._root / project_id / PROJECT_FILE_NAME

    def exists(self, project_id: str) -> bool:
        normalized = self.normalize_project_id(project_id)
        if normalized is None:
            return False
        return self._project_path(normalized).exists()

    def create(self) -> Project:
        """Create a project seeded with the default contract and templates."""
        while True:
            project_id = uuid.uuid4().hex
            if not self._project_path(project_id).exists():
                break
        project = Project.new(project_id)
        self.save(project)
        return project

    def load(self, project_id: str) -> Project:
        normalized = self.normalize_project_id(project_id)
        if normalized is None:
            raise ProjectNotFoundError(project_id)
        path = self._project_path(normalized)
        if not path.exists():
            raise ProjectNotFoundError(project_id)
        with self._project_lock(normalized):
            data = json.loads(path.read_text())
        return Project.from_dict(data)

    def save(self, project: Project) -> None:
        normalized = self.normalize_project_id(project.id)
        if normalized is None:
            raise ValueError(f"Invalid project id '{project.id}'.")
        path = self._project_path(normalized)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        with self._project_lock(normalized):
            tmp_path.write_text(json.dumps(project.to_dict(), indent=2, sort_keys=True))
            tmp_path.replace(path)

    def list_projects(self) -> List[str]:
        return sorted(
            item.name
            for item in self._root.iterdir()
            if item.is_dir()
            if (item / PROJECT_FILE_NAME).exists()
        )

    def delete(self, project_id: str) -> None:
        normalized = self.normalize_project_id(project_id)
        if normalized is None:
            return
        with self._locks_lock:
            self._locks.pop(normalized, None)
        shutil.rmtree(self._root / normalized, ignore_errors=True)

    @contextmanager
    def _project_lock(self, project_id: str) -> Iterator[threading.RLock]:
        with self._locks_lock:
            lock = self._locks.setdefault(project_id, threading.RLock())
        with lock:
            yield lock
