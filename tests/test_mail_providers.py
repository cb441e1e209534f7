"""Tests for the mail providers: Resend over a mock transport, console and fallback modes, selection."""

import asyncio
import json
import sys
import unittest
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.mail_provider import (
    ConsoleMailProvider,
    ResendMailProvider,
    UnconfiguredMailProvider,
    build_provider,
)
from src.models.email import DeliveryResult, OutgoingEmail

EMAIL = OutgoingEmail(to="a@example.com, b@example.com ,", subject="Hi", html="<p>Hello <b>there</b></p>")


def _provider(handler) -> tuple[ResendMailProvider, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    provider = ResendMailProvider(
        api_key="re_test", from_address="Shop <shop@example.com>", base_url="https://api.test", client=client
    )
    return provider, seen


class TestResendProvider(unittest.TestCase):
    def test_success_posts_expected_payload(self):
        provider, seen = _provider(lambda r: httpx.Response(200, json={"id": "email_123"}))
        result = asyncio.run(provider.send(EMAIL))
        self.assertEqual(result, DeliveryResult(success=True, message_id="email_123"))

        self.assertEqual(len(seen), 1)
        request = seen[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), "https://api.test/emails")
        self.assertEqual(request.headers["authorization"], "Bearer re_test")
        body = json.loads(request.content)
        self.assertEqual(body["to"], ["a@example.com", "b@example.com"])
        self.assertEqual(body["from"], "Shop <shop@example.com>")
        self.assertEqual(body["subject"], "Hi")
        self.assertEqual(body["html"], "<p>Hello <b>there</b></p>")

    def test_explicit_from_overrides_default(self):
        provider, seen = _provider(lambda r: httpx.Response(200, json={"id": "x"}))
        asyncio.run(provider.send(EMAIL.model_copy(update={"from_address": "Alerts <alerts@example.com>"})))
        self.assertEqual(json.loads(seen[0].content)["from"], "Alerts <alerts@example.com>")

    def test_error_uses_provider_message(self):
        provider, _ = _provider(lambda r: httpx.Response(422, json={"message": "Invalid `to` field"}))
        result = asyncio.run(provider.send(EMAIL))
        self.assertFalse(result.success)
        self.assertEqual(result.error, "Invalid `to` field")
        self.assertIsNone(result.message_id)

    def test_error_without_json_body(self):
        provider, _ = _provider(lambda r: httpx.Response(503, text="upstream down"))
        result = asyncio.run(provider.send(EMAIL))
        self.assertEqual(result.error, "Resend API error: 503")

    def test_success_body_without_id_is_failure(self):
        for body in (["x"], {"data": {}}, "ok"):
            provider, _ = _provider(lambda r, body=body: httpx.Response(200, json=body))
            result = asyncio.run(provider.send(EMAIL))
            self.assertFalse(result.success)
            self.assertEqual(result.error, "Resend API response did not include an email id")

    def test_transport_error_is_failure(self):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider, _ = _provider(boom)
        result = asyncio.run(provider.send(EMAIL))
        self.assertFalse(result.success)
        self.assertIn("connection refused", result.error)

    def test_verify(self):
        provider, seen = _provider(lambda r: httpx.Response(200, json={"data": []}))
        status = asyncio.run(provider.verify())
        self.assertEqual(status.status, "ready")
        self.assertEqual(str(seen[0].url), "https://api.test/domains")

        provider, _ = _provider(lambda r: httpx.Response(401, json={"message": "API key is invalid"}))
        status = asyncio.run(provider.verify())
        self.assertEqual((status.status, status.message), ("error", "API key is invalid"))

    def test_requires_key(self):
        with self.assertRaises(ValueError):
            ResendMailProvider(api_key="")


class TestLocalProviders(unittest.TestCase):
    def test_console_provider(self):
        provider = ConsoleMailProvider()
        result = asyncio.run(provider.send(EMAIL))
        self.assertTrue(result.success)
        self.assertTrue(result.message_id.startswith("dev-"))
        self.assertEqual(provider.sent, [EMAIL])
        self.assertEqual(asyncio.run(provider.verify()).status, "ready")

    def test_unconfigured_provider(self):
        provider = UnconfiguredMailProvider()
        result = asyncio.run(provider.send(EMAIL))
        self.assertTrue(result.success)
        self.assertTrue(result.message_id.startswith("fallback-"))
        self.assertEqual(asyncio.run(provider.verify()).status, "not_configured")


class TestBuildProvider(unittest.TestCase):
    def test_development_always_console(self):
        self.assertIsInstance(build_provider(environment="development", api_key="re_x"), ConsoleMailProvider)

    def test_production_with_key(self):
        self.assertIsInstance(build_provider(environment="production", api_key="re_x"), ResendMailProvider)

    def test_production_without_key(self):
        self.assertIsInstance(build_provider(environment="production", api_key=""), UnconfiguredMailProvider)


class TestDeliveryResult(unittest.TestCase):
    def test_invariant(self):
        with self.assertRaises(ValueError):
            DeliveryResult(success=True)
        with self.assertRaises(ValueError):
            DeliveryResult(success=False, message_id="x", error="y")
        with self.assertRaises(ValueError):
            DeliveryResult(success=False)
        self.assertEqual(DeliveryResult.failed("").error, "Unknown error")


if __name__ == "__main__":
    unittest.main()
