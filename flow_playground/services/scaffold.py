"""Fetch the static project-generator files the export is built around."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx


logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


DEFAULT_SCAFFOLD_BASE_URL = os.getenv(
    "PLAYGROUND_SCAFFOLD_BASE_URL",
    "https://raw.githubusercontent.com/onflow/flow-playground/master/project-generator",
)
DEFAULT_SCAFFOLD_TIMEOUT = _env_float("PLAYGROUND_SCAFFOLD_TIMEOUT", 10.0)
PROJECT_LINK_ROOT = os.getenv("PLAYGROUND_PROJECT_LINK_ROOT", "https://play.onflow.org")

README_PATH = "files/README.md"
PACKAGE_CONFIG_PATH = "files/package.json"
BABEL_CONFIG_PATH = "files/babel.config.json"
JEST_CONFIG_PATH = "files/jest.config.json"
TEST_HEADER_PATH = "snippets/imports.js"


class ScaffoldFetchError(RuntimeError):
    """Raised when a scaffold file cannot be retrieved."""

    def __init__(self, path: str, reason: str, *, status_code: int | None = None):
        self.path = path
        self.status_code = status_code
        super().__init__(f"Failed to fetch scaffold file '{path}': {reason}")


@dataclass(slots=True)
class ScaffoldFiles:
    readme: str
    package_config: str
    babel_config: str
    jest_config: str
    test_header: str


class ScaffoldClient:
    """Read-only client for the versioned project-generator folder."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or DEFAULT_SCAFFOLD_BASE_URL).rstrip("/")
        self._timeout = DEFAULT_SCAFFOLD_TIMEOUT if timeout is None else timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch_all(self) -> ScaffoldFiles:
        """Fetch every scaffold file, one after another."""
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            return ScaffoldFiles(
                readme=await self._fetch(client, README_PATH),
                package_config=await self._fetch(client, PACKAGE_CONFIG_PATH),
                babel_config=await self._fetch(client, BABEL_CONFIG_PATH),
                jest_config=await self._fetch(client, JEST_CONFIG_PATH),
                test_header=await self._fetch(client, TEST_HEADER_PATH),
            )

    async def _fetch(self, client: httpx.AsyncClient, path: str) -> str:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = await client.get(url)
        except httpx.HTTPError as exc:
            raise ScaffoldFetchError(path, str(exc) or exc.__class__.__name__) from exc
        if response.status_code >= 400:
            raise ScaffoldFetchError(
                path,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        logger.debug("Fetched scaffold file %s (%s bytes)", path, len(response.content))
        return response.text
