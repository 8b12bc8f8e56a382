from __future__ import annotations

import unittest

import httpx

from flow_playground.services.scaffold import (
    BABEL_CONFIG_PATH,
    JEST_CONFIG_PATH,
    PACKAGE_CONFIG_PATH,
    README_PATH,
    TEST_HEADER_PATH,
    ScaffoldClient,
    ScaffoldFetchError,
)


BASE_URL = "https://scaffold.test/project-generator"


def _transport(files: dict[str, str], requested: list[str] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/project-generator/")
        if requested is not None:
            requested.append(path)
        if path in files:
            return httpx.Response(200, text=files[path])
        return httpx.Response(404, text="missing")

    return httpx.MockTransport(handler)


class ScaffoldClientTest(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_all_reads_every_file(self) -> None:
        files = {
            README_PATH: "readme",
            PACKAGE_CONFIG_PATH: "{}",
            BABEL_CONFIG_PATH: "babel",
            JEST_CONFIG_PATH: "jest",
            TEST_HEADER_PATH: "header",
        }
        requested: list[str] = []
        client = ScaffoldClient(BASE_URL + "/", transport=_transport(files, requested))

        result = await client.fetch_all()

        self.assertEqual(result.readme, "readme")
        self.assertEqual(result.jest_config, "jest")
        self.assertEqual(result.test_header, "header")
        self.assertEqual(requested, list(files))
        self.assertEqual(client.base_url, BASE_URL)

    async def test_http_error_raises(self) -> None:
        client = ScaffoldClient(BASE_URL, transport=_transport({}))
        with self.assertRaises(ScaffoldFetchError) as ctx:
            await client.fetch_all()
        self.assertEqual(ctx.exception.path, README_PATH)
        self.assertEqual(ctx.exception.status_code, 404)

    async def test_fetch_stops_at_first_missing_file(self) -> None:
        requested: list[str] = []
        files = {README_PATH: "readme", PACKAGE_CONFIG_PATH: "{}"}
        client = ScaffoldClient(BASE_URL, transport=_transport(files, requested))
        with self.assertRaises(ScaffoldFetchError) as ctx:
            await client.fetch_all()
        self.assertEqual(ctx.exception.path, BABEL_CONFIG_PATH)
        self.assertEqual(requested, [README_PATH, PACKAGE_CONFIG_PATH, BABEL_CONFIG_PATH])

    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        client = ScaffoldClient(BASE_URL, transport=httpx.MockTransport(handler))
        with self.assertRaises(ScaffoldFetchError) as ctx:
            await client.fetch_all()
        self.assertIsNone(ctx.exception.status_code)
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)


if __name__ == "__main__":
    unittest.main()
