"""Tests for dynamic template rendering: substitution, escaping, fallback and determinism."""

import asyncio
import sys
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.db.repositories import template_repo
from src.models.email import RenderedEmail
from src.templating.renderer import TemplateRenderer, substitute
from tests.fakes import temp_database, unreachable_database


class TestSubstitute(unittest.TestCase):
    def test_replaces_every_occurrence(self):
        self.assertEqual(substitute("[A] and [A]", {"A": "x"}, escape=False), "x and x")

    def test_unmatched_placeholder_stays_literal(self):
        self.assertEqual(substitute("Hi [FirstName] [Missing]", {"FirstName": "Jo"}, escape=False), "Hi Jo [Missing]")

    def test_unused_key_is_noop(self):
        self.assertEqual(substitute("static text", {"Nope": "x"}, escape=False), "static text")

    def test_case_sensitive(self):
        self.assertEqual(substitute("[firstname]", {"FirstName": "Jo"}, escape=False), "[firstname]")

    def test_values_are_not_rescanned(self):
        self.assertEqual(substitute("[A] [B]", {"A": "[B]", "B": "b"}, escape=False), "[B] b")

    def test_escape_and_trusted(self):
        text = "[Msg] [Html]"
        out = substitute(text, {"Msg": "<script>x</script>", "Html": "<b>ok</b>"}, escape=True, trusted=["Html"])
        self.assertEqual(out, "&lt;script&gt;x&lt;/script&gt; <b>ok</b>")


class TestTemplateRenderer(unittest.TestCase):
    def setUp(self):
        self.db, self._tmp = temp_database()
        template_repo.create_template(
            self.db,
            template_id="contact-confirmation",
            name="Contact Confirmation",
            subject="Thanks [FirstName] from [Company]!",
            body="<p>Hello [FirstName], your message: [Message]</p>",
        )
        self.renderer = TemplateRenderer(self.db)

    def tearDown(self):
        self.db.dispose()
        self._tmp.cleanup()

    def test_render_active_template(self):
        rendered = asyncio.run(
            self.renderer.render("contact-confirmation", {"FirstName": "Jane", "Company": "Acme", "Message": "hi"})
        )
        self.assertEqual(rendered.subject, "Thanks Jane from Acme!")
        self.assertIn("<p>Hello Jane, your message: hi</p>", rendered.body)
        self.assertIn("<!DOCTYPE html>", rendered.body)

    def test_subject_not_escaped_body_escaped(self):
        rendered = asyncio.run(
            self.renderer.render(
                "contact-confirmation", {"FirstName": "Tom & Jerry", "Company": "A<B>", "Message": "<script>"}
            )
        )
        self.assertEqual(rendered.subject, "Thanks Tom & Jerry from A<B>!")
        self.assertIn("Hello Tom &amp; Jerry", rendered.body)
        self.assertNotIn("<script>", rendered.body)

    def test_deterministic(self):
        variables = {"FirstName": "Jane", "Company": "Acme", "Message": "hi"}
        first = asyncio.run(self.renderer.render("contact-confirmation", variables))
        second = asyncio.run(self.renderer.render("contact-confirmation", variables))
        self.assertEqual(first, second)

    def test_usage_counter_incremented(self):
        asyncio.run(self.renderer.render("contact-confirmation", {}))
        asyncio.run(self.renderer.render("contact-confirmation", {}))
        self.assertEqual(template_repo.get(self.db, "contact-confirmation").usage_count, 2)

    def test_missing_and_inactive_return_none(self):
        self.assertIsNone(asyncio.run(self.renderer.render("does-not-exist", {})))
        template_repo.update_template(self.db, "contact-confirmation", is_active=False)
        self.assertIsNone(asyncio.run(self.renderer.render("contact-confirmation", {})))

    def test_unreachable_store_returns_none(self):
        renderer = TemplateRenderer(unreachable_database())
        self.assertIsNone(asyncio.run(renderer.render("contact-confirmation", {})))

    def test_resolve_tags_source(self):
        fallback = lambda: RenderedEmail(subject="static subject", body="static body")  # noqa: E731
        dynamic = asyncio.run(self.renderer.resolve("contact-confirmation", {"FirstName": "Jane"}, fallback))
        self.assertEqual(dynamic.source, "dynamic")
        static = asyncio.run(self.renderer.resolve("missing", {"FirstName": "Jane"}, fallback))
        self.assertEqual((static.source, static.subject, static.body), ("static", "static subject", "static body"))

    def test_footer_year_follows_submission_not_clock(self):
        variables = {"FirstName": "Jane", "Company": "Acme", "Message": "hi"}
        submitted_at = "2030-06-01T12:00:00+00:00"
        first = asyncio.run(self.renderer.render("contact-confirmation", variables, submitted_at=submitted_at))
        with mock.patch("src.templating.static._current_year", return_value=2031):
            second = asyncio.run(self.renderer.render("contact-confirmation", variables, submitted_at=submitted_at))
        self.assertEqual(first, second)
        self.assertIn("&copy; 2030", second.body)

    def test_trusted_keys_inserted_raw(self):
        rendered = asyncio.run(
            self.renderer.render(
                "contact-confirmation",
                {"FirstName": "<b>Jane</b>", "Message": "<i>hi</i>"},
                trusted=["Message"],
            )
        )
        self.assertIn("Hello &lt;b&gt;Jane&lt;/b&gt;, your message: <i>hi</i>", rendered.body)

    def test_no_layout_wrap(self):
        renderer = TemplateRenderer(self.db, wrap_layout=False)
        rendered = asyncio.run(renderer.render("contact-confirmation", {"FirstName": "Jane", "Message": "m"}))
        self.assertEqual(rendered.body, "<p>Hello Jane, your message: m</p>")


if __name__ == "__main__":
    unittest.main()
