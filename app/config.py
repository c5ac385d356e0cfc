import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from appdirs import user_data_dir

# Constants
APP_NAME = "Resume Builder"

# Project root (source dev mode). In bundled (PyInstaller) mode, resources are under sys._MEIPASS.
def _source_project_root() -> Path:
	return Path(__file__).resolve().parent.parent

def resource_path(relative_path: str) -> Path:
	"""Return a Path to a bundled resource (PyInstaller) or source path (dev)."""
	base = getattr(sys, "_MEIPASS", None)
	if base:
		return Path(base) / relative_path
	return _source_project_root() / relative_path

# Load .env in dev mode (from repository root) for convenience
_DEV_ENV = _source_project_root() / ".env"
if _DEV_ENV.exists():
	load_dotenv(_DEV_ENV)

# Per-user writable location for the database
USER_DATA_DIR = Path(user_data_dir(APP_NAME))

def _number_env(name: str, default, kind=float):
	raw = (os.getenv(name) or "").strip()
	if not raw:
		return default
	try:
		return kind(raw)
	except ValueError:
		print(f"[warn] {name}={raw!r} is not a valid {kind.__name__}; using {default}")
		return default

# SQLite database; env var overrides the per-user default
DB_PATH = Path(os.getenv("RESUME_BUILDER_DB_PATH") or (USER_DATA_DIR / "resumes.db"))

# Wizard auto-save debounce, seconds
AUTOSAVE_DELAY_SECONDS = _number_env("RESUME_BUILDER_AUTOSAVE_DELAY", 1.0)

# Local address run_app.py serves on
SERVER_HOST = os.getenv("RESUME_BUILDER_HOST") or "127.0.0.1"
SERVER_PORT = _number_env("RESUME_BUILDER_PORT", 8000, kind=int)

# Base URL used by the wizard client
API_URL = (os.getenv("RESUME_BUILDER_API_URL") or f"http://{SERVER_HOST}:{SERVER_PORT}").rstrip("/")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Resource directories (bundled-safe)
VIEWS_DIR = resource_path("app/views")

# Increment per release
APP_VERSION = "0.1.0"
