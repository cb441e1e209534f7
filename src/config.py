"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Deployment environment: "development" logs emails to the console instead of sending them
APP_ENV = os.getenv("APP_ENV", "development").strip().lower()
PRODUCTION = "production"
DEVELOPMENT = "development"

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'submissions.sqlite'}")

# Transactional email provider (Resend-compatible API)
RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com").rstrip("/")

# Addresses
FROM_EMAIL = os.getenv("FROM_EMAIL", "AMP Vending <ampdesignandconsulting@gmail.com>")
TO_EMAIL = os.getenv("TO_EMAIL", "ampdesignandconsulting@gmail.com")
ALERT_EMAIL = os.getenv("ALERT_EMAIL", "") or TO_EMAIL
ALERT_FROM_EMAIL = os.getenv("ALERT_FROM_EMAIL", "") or os.getenv(
    "FROM_EMAIL", "AMP Vending Alerts <alerts@ampvendingmachines.com>"
)

# Scheduled monitor (shared secret sent as a bearer token by the scheduler)
CRON_SECRET = os.getenv("CRON_SECRET", "")

# HTTP server
SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "8000"))

# Logging
LOG_DIR = OUTPUT_DIR / "logs"
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"

# OpenTelemetry
TRACING_ENABLED = os.getenv("TRACING_ENABLED", "false").lower() == "true"
OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv(
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "http://localhost:4318/v1/traces",
)
OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "vending-notifications")

# Default email templates seeded into the database
EMAIL_TEMPLATES_SEED_PATH = Path(
    os.getenv("EMAIL_TEMPLATES_SEED_PATH", "") or PROJECT_ROOT / "config" / "email_templates.yaml"
)
