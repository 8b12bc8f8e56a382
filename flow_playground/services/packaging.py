"""Archive writers for exported projects."""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile
from typing import Dict, Literal, Protocol


CollisionPolicy = Literal["overwrite", "reject", "suffix"]

logger = logging.getLogger(__name__)


class PackageCollisionError(ValueError):
    """Raised when two entries resolve to the same archive path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Archive already contains '{path}'.")


class PackageWriter(Protocol):
    def write(self, path: str, content: str | bytes) -> str: ...

    def finalize(self) -> bytes: ...


class ZipPackageWriter:
    """Buffer archive entries in memory and emit a deflated zip on finalize."""

    def __init__(self, *, on_collision: CollisionPolicy = "overwrite"):
        if on_collision not in ("overwrite", "reject", "suffix"):
            raise ValueError(f"Unknown collision policy '{on_collision}'.")
        self._on_collision = on_collision
        self._entries: Dict[str, bytes] = {}
        self._finalized = False

    @property
    def paths(self) -> list[str]:
        return list(self._entries)

    def write(self, path: str, content: str | bytes) -> str:
        """Add an entry and return the path it was stored under."""
        if self._finalized:
            raise RuntimeError("Package has already been finalized.")
        clean = posixpath.normpath(path.replace("\\", "/")).lstrip("/")
        if not clean or clean in (".", "..") or clean.startswith("../"):
            raise ValueError(f"Invalid archive path '{path}'.")

        if clean in self._entries:
            clean = self._resolve_collision(clean)

        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        self._entries[clean] = data
        return clean

    def finalize(self) -> bytes:
        self._finalized = True
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            for path, data in self._entries.items():
                # Fixed timestamp keeps identical projects byte-identical.
                info = zipfile.ZipInfo(path, date_time=(1980, 1, 1, 0, 0, 0))
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, data)
        return buffer.getvalue()

    def _resolve_collision(self, path: str) -> str:
        if self._on_collision == "reject":
            raise PackageCollisionError(path)
        if self._on_collision == "overwrite":
            logger.warning("Overwriting archive entry %s with a later entity.", path)
            return path

        stem, ext = posixpath.splitext(path)
        counter = 2
        while f"{stem}-{counter}{ext}" in self._entries:
            counter += 1
        return f"{stem}-{counter}{ext}"
