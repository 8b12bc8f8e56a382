"""Package a playground project as a runnable flow-js-testing scaffold."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Tuple

from .accounts import account_address
from .extraction import extract_contract_name
from .formatting import format_code_async
from .packaging import PackageWriter, ZipPackageWriter
from .projects import Account, Project
from .scaffold import PROJECT_LINK_ROOT, ScaffoldClient, ScaffoldFiles
from .templating import render_template
from .testgen import (
    Formatter,
    assemble_contract_test,
    assemble_script_test,
    assemble_transaction_test,
)


DEFAULT_BASE_FOLDER = "cadence"
UNTITLED_FILE_NAME = "untitled"

_PATH_SEPARATORS = re.compile(r"[\\/]+")

logger = logging.getLogger(__name__)

WriterFactory = Callable[[], PackageWriter]


@dataclass(frozen=True, slots=True)
class ExportBundle:
    """Every archive entry of one export, in write order."""

    entries: Tuple[Tuple[str, str], ...]

    @property
    def paths(self) -> List[str]:
        return [path for path, _ in self.entries]

    def get(self, path: str) -> str | None:
        for entry_path, content in reversed(self.entries):
            if entry_path == path:
                return content
        return None


def _deployable(project: Project) -> List[Account]:
    """Accounts with contract code; blank accounts have nothing to deploy."""
    return [account for account in project.accounts if account.draft_code.strip()]


def project_name(project: Project) -> str:
    return f"playground-project-{project.id.lower()}"


def contract_file_name(address: str, source: str) -> str:
    """Name the contract file after the declared contract, else its account."""
    return extract_contract_name(source) or address


def entity_file_name(title: str) -> str:
    """Flatten a template title into a single file name inside its folder."""
    name = _PATH_SEPARATORS.sub("-", title).strip(" .-")
    return name or UNTITLED_FILE_NAME


class ProjectExporter:
    """Build the export bundle for a project and hand it to a package writer."""

    def __init__(
        self,
        scaffold: ScaffoldClient | None = None,
        *,
        writer_factory: WriterFactory | None = None,
        formatter: Formatter | None = None,
        base_folder: str = DEFAULT_BASE_FOLDER,
    ):
        self._scaffold = scaffold or ScaffoldClient()
        self._writer_factory: WriterFactory = writer_factory or ZipPackageWriter
        self._formatter: Formatter = formatter or format_code_async
        self._base_folder = base_folder

    async def generate_tests(self, project: Project, header: str) -> str:
        """Render every entity's test case into one test file."""
        deployment_tests = ""
        for account in _deployable(project):
            deployment_tests += await assemble_contract_test(
                account_address(account.address),
                account.draft_code,
                formatter=self._formatter,
            )
            deployment_tests += "\n"

        execution_tests = ""
        for template in project.transaction_templates:
            execution_tests += await assemble_transaction_test(
                template.title, template.script, formatter=self._formatter
            )
            execution_tests += "\n"
        for template in project.script_templates:
            execution_tests += await assemble_script_test(
                template.title, template.script, formatter=self._formatter
            )
            execution_tests += "\n"

        content = render_template(
            header,
            {
                "BASE-FOLDER": f"../{self._base_folder}",
                "DEPLOYMENT-TESTS": deployment_tests,
                "TRANSACTIONS-AND-SCRIPTS-TESTS": execution_tests,
            },
            strict=False,
        )
        return await self._formatter(content)

    async def build_bundle(self, project: Project) -> ExportBundle:
        files: ScaffoldFiles = await self._scaffold.fetch_all()
        project_id = project.id.lower()

        entries: List[Tuple[str, str]] = [
            (
                "test/README.md",
                render_template(
                    files.readme,
                    {
                        "PROJECT-ID": project_id,
                        "PROJECT-LINK": f"{PROJECT_LINK_ROOT.rstrip('/')}/{project_id}",
                    },
                    strict=False,
                ),
            ),
            (
                "test/package.json",
                render_template(
                    files.package_config,
                    {"PROJECT-NAME": project_name(project)},
                    strict=False,
                ),
            ),
            ("test/babel.config.json", files.babel_config),
            ("test/jest.config.json", files.jest_config),
            ("test/index.test.js", await self.generate_tests(project, files.test_header)),
        ]

        for account in _deployable(project):
            name = contract_file_name(account_address(account.address), account.draft_code)
            entries.append((f"{self._base_folder}/contracts/{name}.cdc", account.draft_code))
        for folder, templates in (
            ("transactions", project.transaction_templates),
            ("scripts", project.script_templates),
        ):
            for template in templates:
                path = f"{self._base_folder}/{folder}/{entity_file_name(template.title)}.cdc"
                entries.append((path, template.script))

        return ExportBundle(entries=tuple(entries))

    async def export_project(self, project: Project) -> bytes:
        """Return the zipped export of `project`.

        Scaffold and formatting failures propagate before a writer exists, so a
        failed export never produces a partial archive.
        """
        bundle = await self.build_bundle(project)
        writer = self._writer_factory()
        for path, content in bundle.entries:
            writer.write(path, content)
        archive = await asyncio.to_thread(writer.finalize)
        logger.info(
            "Exported project %s (%s files, %s bytes)",
            project.id,
            len(bundle.entries),
            len(archive),
        )
        return archive
