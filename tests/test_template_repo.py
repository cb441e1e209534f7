"""Tests for the email template repository and default template seeding."""

import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.config import PROJECT_ROOT
from src.db.repositories import template_repo
from src.db.repositories.template_repo import TemplateNotFoundError, TemplateProtectedError, extract_variables
from src.db.seed_data import load_template_seeds, seed_default_templates
from tests.fakes import temp_database


class TestExtractVariables(unittest.TestCase):
    def test_order_of_first_appearance(self):
        self.assertEqual(
            extract_variables("Hi [FirstName]", "<p>[Company] [FirstName] [Email]</p>"),
            ["FirstName", "Company", "Email"],
        )

    def test_none_found(self):
        self.assertEqual(extract_variables("plain", ""), [])


class TestTemplateRepo(unittest.TestCase):
    def setUp(self):
        self.db, self._tmp = temp_database()

    def tearDown(self):
        self.db.dispose()
        self._tmp.cleanup()

    def test_create_computes_variables(self):
        row = template_repo.create_template(self.db, "t1", "T1", "Hello [Name]", "<p>[Message]</p>")
        self.assertEqual(row.variables, ["Name", "Message"])
        self.assertTrue(row.is_active)
        self.assertEqual(row.usage_count, 0)

    def test_update_recomputes_variables(self):
        template_repo.create_template(self.db, "t1", "T1", "Hello [Name]", "<p>[Message]</p>")
        row = template_repo.update_template(self.db, "t1", body="<p>[Location]</p>")
        self.assertEqual(row.variables, ["Name", "Location"])
        row = template_repo.update_template(self.db, "t1", name="Renamed")
        self.assertEqual(row.variables, ["Name", "Location"])
        self.assertEqual(row.name, "Renamed")

    def test_update_unknown_field(self):
        template_repo.create_template(self.db, "t1", "T1", "s", "b")
        with self.assertRaises(ValueError):
            template_repo.update_template(self.db, "t1", usage_count=5)

    def test_default_template_cannot_be_deleted(self):
        template_repo.create_template(self.db, "d1", "Default", "s", "b", is_default=True)
        with self.assertRaises(TemplateProtectedError):
            template_repo.delete_template(self.db, "d1")
        self.assertIsNotNone(template_repo.get(self.db, "d1"))

    def test_delete_regular_template(self):
        template_repo.create_template(self.db, "t1", "T1", "s", "b")
        template_repo.delete_template(self.db, "t1")
        self.assertIsNone(template_repo.get(self.db, "t1"))
        with self.assertRaises(TemplateNotFoundError):
            template_repo.delete_template(self.db, "t1")

    def test_list_active_only(self):
        template_repo.create_template(self.db, "b", "B", "s", "b")
        template_repo.create_template(self.db, "a", "A", "s", "b")
        template_repo.create_template(self.db, "off", "Off", "s", "b", is_active=False)
        self.assertEqual([r.template_id for r in template_repo.list_active_templates(self.db)], ["a", "b"])


class TestSeedTemplates(unittest.TestCase):
    def setUp(self):
        self.db, self._tmp = temp_database()

    def tearDown(self):
        self.db.dispose()
        self._tmp.cleanup()

    def test_bundled_seed_file(self):
        seeds = load_template_seeds(PROJECT_ROOT / "config" / "email_templates.yaml")
        ids = {s["template_id"] for s in seeds}
        self.assertIn("contact-confirmation", ids)
        self.assertIn("feedback-confirmation", ids)

    def test_seed_is_idempotent(self):
        path = PROJECT_ROOT / "config" / "email_templates.yaml"
        first = seed_default_templates(self.db, path)
        second = seed_default_templates(self.db, path)
        self.assertIn("contact-confirmation", first)
        self.assertEqual(second, [])
        row = template_repo.get(self.db, "contact-confirmation")
        self.assertTrue(row.is_default)
        self.assertIn("FirstName", row.variables)

    def test_invalid_seed_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yaml"
            path.write_text("templates:\n  - name: no id\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_template_seeds(path)
            with self.assertRaises(FileNotFoundError):
                load_template_seeds(Path(tmp) / "missing.yaml")


if __name__ == "__main__":
    unittest.main()
