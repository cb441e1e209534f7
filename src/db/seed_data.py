"""Seed the email_templates table from config/email_templates.yaml."""

from pathlib import Path
from typing import Any

import yaml

from src.config import EMAIL_TEMPLATES_SEED_PATH
from src.db import Database
from src.db.repositories import template_repo
from src.utils.logger import get_logger

logger = get_logger("vending_notifications.db.seed_data")

_REQUIRED_KEYS = ("template_id", "name", "subject", "body")


def load_template_seeds(path: Path | None = None) -> list[dict[str, Any]]:
    """Read and validate the template seed file. Raises FileNotFoundError / ValueError."""
    path = Path(path or EMAIL_TEMPLATES_SEED_PATH)
    if not path.exists():
        raise FileNotFoundError(
            f"Email templates seed not found: {path}. Set EMAIL_TEMPLATES_SEED_PATH or create config/email_templates.yaml."
        )
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in email templates seed {path}: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("templates"), list):
        raise ValueError(f"Email templates seed must be a mapping with a 'templates' list, got {type(data)}")

    seeds = data["templates"]
    for i, entry in enumerate(seeds):
        if not isinstance(entry, dict):
            raise ValueError(f"Template entry #{i} must be a mapping")
        for key in _REQUIRED_KEYS:
            if not entry.get(key):
                raise ValueError(f"Template entry #{i} missing required key {key!r}")
    return seeds


def seed_default_templates(db: Database, path: Path | None = None) -> list[str]:
    """Insert templates whose template_id is not yet present. Returns the ids inserted."""
    inserted: list[str] = []
    for entry in load_template_seeds(path):
        template_id = entry["template_id"]
        if template_repo.get(db, template_id) is not None:
            logger.debug("seed.template_exists", template_id=template_id)
            continue
        template_repo.create_template(
            db,
            template_id=template_id,
            name=entry["name"],
            subject=entry["subject"],
            body=entry["body"],
            description=entry.get("description"),
            category=entry.get("category", "transactional"),
            is_active=bool(entry.get("is_active", True)),
            is_default=bool(entry.get("is_default", True)),
        )
        inserted.append(template_id)
    logger.info("seed.templates_done", inserted=len(inserted), ids=inserted)
    return inserted
