from __future__ import annotations

import io
import unittest
import zipfile
from unittest import mock

import httpx

from flow_playground.services.exporter import ProjectExporter, entity_file_name, project_name
from flow_playground.services.formatting import CodeFormattingError
from flow_playground.services.packaging import PackageCollisionError, ZipPackageWriter
from flow_playground.services.projects import Account, Project, Template
from flow_playground.services.scaffold import ScaffoldClient, ScaffoldFetchError


TEST_HEADER = """\
import path from "path";
import { init, emulator, getAccountAddress, getContractAddress, deployContractByName,
  getScriptCode, getTransactionCode, executeScript, sendTransaction, types } from "flow-js-testing";

const basePath = path.resolve(__dirname, "##BASE-FOLDER##");

describe("playground project", () => {
  beforeEach(async () => {
    await init(basePath);
    return emulator.start();
  });

  afterEach(async () => {
    return emulator.stop();
  });

  // ##DEPLOYMENT-TESTS##

  // ##TRANSACTIONS-AND-SCRIPTS-TESTS##
});
"""

SCAFFOLD_FILES = {
    "files/README.md": "# Project ##PROJECT-ID##\n\nOpen ##PROJECT-LINK##\n",
    "files/package.json": '{"name": "##PROJECT-NAME##"}\n',
    "files/babel.config.json": '{"presets": []}\n',
    "files/jest.config.json": '{"testEnvironment": "node"}\n',
    "snippets/imports.js": TEST_HEADER,
}


def scaffold_client(files: dict[str, str] | None = None) -> ScaffoldClient:
    files = SCAFFOLD_FILES if files is None else files

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/gen/")
        if path in files:
            return httpx.Response(200, text=files[path])
        return httpx.Response(500, text="server error")

    return ScaffoldClient("https://scaffold.test/gen", transport=httpx.MockTransport(handler))


async def passthrough(source: str) -> str:
    return source


def _entries(archive: bytes) -> dict[str, str]:
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        return {name: zf.read(name).decode("utf-8") for name in zf.namelist()}


class ProjectExporterTest(unittest.IsolatedAsyncioTestCase):
    def single_contract_project(self) -> Project:
        return Project(
            id="ABC123",
            accounts=[Account(address="0000000000000001", draft_code="contract Foo { }")],
        )

    async def test_single_contract_export(self) -> None:
        exporter = ProjectExporter(scaffold_client())
        archive = await exporter.export_project(self.single_contract_project())
        files = _entries(archive)

        self.assertEqual(
            sorted(files),
            sorted([
                "test/README.md",
                "test/package.json",
                "test/babel.config.json",
                "test/jest.config.json",
                "test/index.test.js",
                "cadence/contracts/Foo.cdc",
            ]),
        )
        self.assertEqual(files["cadence/contracts/Foo.cdc"], "contract Foo { }")
        self.assertEqual(files["test/index.test.js"].count("Deploy Foo contract"), 1)
        self.assertIn('"../cadence"', files["test/index.test.js"])
        self.assertNotIn("##", files["test/index.test.js"])
        self.assertEqual(
            files["test/README.md"],
            "# Project abc123\n\nOpen https://play.onflow.org/abc123\n",
        )
        self.assertEqual(files["test/package.json"], '{"name": "playground-project-abc123"}\n')
        self.assertEqual(project_name(self.single_contract_project()), "playground-project-abc123")

    async def test_export_is_idempotent(self) -> None:
        exporter = ProjectExporter(scaffold_client())
        project = self.single_contract_project()
        first = await exporter.export_project(project)
        second = await exporter.export_project(project)
        self.assertEqual(first, second)

    async def test_transactions_precede_scripts(self) -> None:
        project = Project(
            id="p1",
            accounts=[Account(address="0x01", draft_code="pub contract Hello {}")],
            transaction_templates=[
                Template(title="Tx One", script="transaction {\n prepare(a: AuthAccount) {}\n}"),
            ],
            script_templates=[
                Template(title="Script One", script="pub fun main(): Int { return 1 }"),
            ],
        )
        exporter = ProjectExporter(scaffold_client(), formatter=passthrough)
        bundle = await exporter.build_bundle(project)
        tests = bundle.get("test/index.test.js") or ""

        deploy = tests.index("Deploy Hello contract")
        tx = tests.index("test transaction template Tx One")
        script = tests.index("test script template Script One")
        self.assertLess(deploy, tx)
        self.assertLess(tx, script)
        self.assertEqual(
            bundle.paths[5:],
            [
                "cadence/contracts/Hello.cdc",
                "cadence/transactions/Tx One.cdc",
                "cadence/scripts/Script One.cdc",
            ],
        )

    async def test_blank_accounts_are_skipped(self) -> None:
        project = Project(
            id="p2",
            accounts=[Account(address="0x01", draft_code="contract Foo { }"), Account(address="0x02")],
        )
        exporter = ProjectExporter(scaffold_client(), formatter=passthrough)
        bundle = await exporter.build_bundle(project)
        self.assertEqual([p for p in bundle.paths if p.startswith("cadence/")], ["cadence/contracts/Foo.cdc"])

    async def test_titles_become_flat_file_names(self) -> None:
        project = Project(
            id="p5",
            transaction_templates=[
                Template(title="../x", script="transaction {}"),
                Template(title="Send/Receive", script="transaction {}"),
            ],
            script_templates=[Template(title="..", script="pub fun main() {}")],
        )
        exporter = ProjectExporter(scaffold_client(), formatter=passthrough)
        files = _entries(await exporter.export_project(project))
        self.assertEqual(
            sorted(path for path in files if path.startswith("cadence/")),
            [
                "cadence/scripts/untitled.cdc",
                "cadence/transactions/Send-Receive.cdc",
                "cadence/transactions/x.cdc",
            ],
        )
        self.assertEqual(entity_file_name(" a\\b "), "a-b")

    async def test_name_collisions_overwrite_by_default(self) -> None:
        project = Project(
            id="p3",
            script_templates=[
                Template(title="Same", script="pub fun main(): Int { return 1 }"),
                Template(title="Same", script="pub fun main(): Int { return 2 }"),
            ],
        )
        exporter = ProjectExporter(scaffold_client(), formatter=passthrough)
        files = _entries(await exporter.export_project(project))
        self.assertEqual(files["cadence/scripts/Same.cdc"], "pub fun main(): Int { return 2 }")

    async def test_name_collisions_can_be_rejected(self) -> None:
        project = Project(
            id="p4",
            script_templates=[Template(title="Same"), Template(title="Same")],
        )
        exporter = ProjectExporter(
            scaffold_client(),
            formatter=passthrough,
            writer_factory=lambda: ZipPackageWriter(on_collision="reject"),
        )
        with self.assertRaises(PackageCollisionError):
            await exporter.export_project(project)

    async def test_scaffold_failure_aborts_before_writing(self) -> None:
        files = dict(SCAFFOLD_FILES)
        files.pop("files/jest.config.json")
        writer_factory = mock.Mock()
        exporter = ProjectExporter(scaffold_client(files), writer_factory=writer_factory)

        with self.assertRaises(ScaffoldFetchError):
            await exporter.export_project(self.single_contract_project())
        writer_factory.assert_not_called()

    async def test_formatting_failure_aborts_before_writing(self) -> None:
        async def broken(source: str) -> str:
            raise CodeFormattingError("unbalanced braces")

        writer_factory = mock.Mock()
        exporter = ProjectExporter(scaffold_client(), formatter=broken, writer_factory=writer_factory)

        with self.assertRaises(CodeFormattingError):
            await exporter.export_project(self.single_contract_project())
        writer_factory.assert_not_called()


if __name__ == "__main__":
    unittest.main()
