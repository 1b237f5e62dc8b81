import json
import unittest
from unittest import mock

from slop_mcp.config import ServerConfig
from slop_mcp.errors import ErrorKind, MalformedResponseError, TransportError, UpstreamError
from slop_mcp.models import ResponseFormat
from slop_mcp.upstream import UpstreamGateway

from support import FakeUpstream, unused_base_url

YAML_BODY = "openapi: 3.0.0\ninfo:\n  title: Stripe\n  version: '1'\n"


class TestUpstreamGateway(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.upstream = FakeUpstream()
        await self.upstream.start()
        self.gateway = UpstreamGateway(self.upstream.config())

    async def asyncTearDown(self):
        await self.upstream.close()

    async def test_overview_json_is_pretty_printed(self):
        self.upstream.respond("/overview/stripe", '{"title":"Stripe","paths":["/charges"]}')
        text = await self.gateway.fetch_overview("stripe", ResponseFormat.JSON)
        self.assertEqual(text, json.dumps({"title": "Stripe", "paths": ["/charges"]}, indent=2))
        self.assertEqual(self.upstream.requests[0]["accept"], "application/json")

    async def test_operation_url_and_yaml_passthrough(self):
        self.upstream.respond("/summary/a.b__c/GetCharges", YAML_BODY, content_type="text/yaml")
        text = await self.gateway.fetch_operation("a.b__c", "GetCharges", ResponseFormat.YAML)
        self.assertEqual(text, YAML_BODY)
        self.assertEqual(self.upstream.requests[0], {"path": "/summary/a.b__c/GetCharges", "accept": "text/yaml"})

    async def test_yaml_body_that_is_not_json_is_not_parsed(self):
        self.upstream.respond("/overview/stripe", "{not json", content_type="text/yaml")
        self.assertEqual(await self.gateway.fetch_overview("stripe", ResponseFormat.YAML), "{not json")

    async def test_non_ascii_json_is_kept(self):
        self.upstream.respond("/overview/cafe", '{"name": "caf\\u00e9"}')
        self.assertIn("café", await self.gateway.fetch_overview("cafe"))

    async def test_error_status_carries_body(self):
        self.upstream.respond("/overview/missing", "not found", status=404, content_type="text/plain")
        with self.assertRaises(UpstreamError) as ctx:
            await self.gateway.fetch_overview("missing")
        self.assertEqual(ctx.exception.message, "not found")
        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(ctx.exception.kind, ErrorKind.UPSTREAM)

    async def test_invalid_json_is_malformed(self):
        """A 2xx body that is not JSON fails when JSON was requested."""
        self.upstream.respond("/overview/broken", "<html>oops</html>", content_type="text/html")
        with self.assertRaises(MalformedResponseError) as ctx:
            await self.gateway.fetch_overview("broken", ResponseFormat.JSON)
        self.assertIsInstance(ctx.exception.cause, ValueError)

    async def test_connection_failure_is_transport_error(self):
        """Connection refused maps to TransportError."""
        gateway = UpstreamGateway(ServerConfig(base_url=await unused_base_url()))
        with self.assertRaises(TransportError) as ctx:
            await gateway.fetch_overview("stripe")
        self.assertTrue(ctx.exception.message)
        self.assertIsNotNone(ctx.exception.cause)

    async def test_upstream_errors_are_not_retried(self):
        """Only transport failures are retried."""
        gateway = UpstreamGateway(self.upstream.config(max_attempts=3))
        with self.assertRaises(UpstreamError):
            await gateway.fetch_overview("missing")
        self.assertEqual(len(self.upstream.requests), 1)

    async def test_transport_failure_is_retried(self):
        """A transport failure is retried once when two attempts are allowed."""
        gateway = UpstreamGateway(self.upstream.config(max_attempts=2))
        responses = [TransportError("connection refused"), "{}"]
        with mock.patch.object(gateway, "_get", mock.AsyncMock(side_effect=responses)) as get, \
                self.assertLogs(level="WARNING") as logs:
            self.assertEqual(await gateway.fetch_overview("stripe"), "{}")
        self.assertEqual(get.await_count, 2)
        self.assertEqual(len(logs.records), 1)
        self.assertIn("Attempt 1/2", logs.output[0])

    async def test_undecodable_error_body_is_kept(self):
        """Bytes that are not UTF-8 are replaced, and the upstream body still becomes the message."""
        self.upstream.respond("/overview/latin1", b"not found \xff", status=404, content_type="text/plain")
        with self.assertRaises(UpstreamError) as ctx:
            await self.gateway.fetch_overview("latin1")
        self.assertEqual(ctx.exception.message, "not found \ufffd")

    async def test_undecodable_yaml_body_is_passed_through(self):
        self.upstream.respond("/overview/latin1", b"title: caf\xe9\n", content_type="text/yaml")
        text = await self.gateway.fetch_overview("latin1", ResponseFormat.YAML)
        self.assertEqual(text, "title: caf\ufffd\n")


class TestGatewayDefaults(unittest.TestCase):

    def test_single_attempt_without_timeout(self):
        gateway = UpstreamGateway(ServerConfig())
        self.assertEqual(gateway.config.max_attempts, 1)
        self.assertIsNone(gateway.config.request_timeout)

    def test_urls(self):
        gateway = UpstreamGateway(ServerConfig())
        self.assertEqual(gateway.overview_url("stripe"), "https://oapis.org/overview/stripe")
        self.assertEqual(gateway.operation_url("stripe", "GetCharges"), "https://oapis.org/summary/stripe/GetCharges")


if __name__ == '__main__':
    unittest.main()
