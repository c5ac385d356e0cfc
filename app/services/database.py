"""
SQLite persistence for resumes and the template catalog.

Structured sub-documents are stored as JSON text columns; every statement is
parameterized. One connection is shared across request threads and guarded
by a lock.
"""

from __future__ import annotations
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

SCHEMA = (
	"""
	CREATE TABLE IF NOT EXISTS resumes (
		id INTEGER PRIMARY KEY AUTOINCREMENT,
		user_id TEXT NOT NULL,
		title TEXT NOT NULL,
		template_id TEXT NOT NULL,
		personal_info TEXT,
		professional_summary TEXT,
		work_experience TEXT,
		education TEXT,
		skills TEXT,
		additional_sections TEXT,
		customization TEXT,
		created_at TEXT NOT NULL,
		updated_at TEXT NOT NULL
	)
	""",
	"CREATE INDEX IF NOT EXISTS idx_resumes_user_updated ON resumes(user_id, updated_at)",
	"""
	CREATE TABLE IF NOT EXISTS templates (
		id TEXT PRIMARY KEY,
		name TEXT NOT NULL,
		category TEXT NOT NULL,
		preview_image TEXT,
		is_active INTEGER NOT NULL DEFAULT 1,
		created_at TEXT NOT NULL
	)
	""",
)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_timestamp() -> str:
	return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class ResumeDatabase:
	"""
	Thin wrapper around a sqlite3 connection.

	Creates the schema on open. Rows come back as plain dicts keyed by column
	name. The clock used for created/updated timestamps can be replaced, which
	tests use to get strictly increasing values.
	"""

	def __init__(self, db_path: Union[Path, str], clock: Optional[Callable[[], str]] = None):
		"""
		Args:
			db_path: Database file, or ":memory:"
			clock: Callable returning the current timestamp as an ISO string
		"""
		self.db_path = db_path
		self.clock = clock or utc_timestamp
		if str(db_path) != ":memory:":
			Path(db_path).parent.mkdir(parents=True, exist_ok=True)

		self._lock = threading.Lock()
		self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
		self.conn.row_factory = sqlite3.Row

		with self._lock:
			for stmt in SCHEMA:
				self.conn.execute(stmt)
			self.conn.commit()
		logger.info("database: opened path=%s", db_path)

	def now(self) -> str:
		return self.clock()

	def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
		"""
		Run a single write statement and commit.

		Returns:
			The cursor, so callers can read lastrowid / rowcount
		"""
		with self._lock:
			try:
				cursor = self.conn.execute(sql, tuple(params))
				self.conn.commit()
			except sqlite3.Error:
				self.conn.rollback()
				raise
		return cursor

	def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
		with self._lock:
			cursor = self.conn.execute(sql, tuple(params))
			return [dict(row) for row in cursor.fetchall()]

	def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
		rows = self.query(sql, params)
		return rows[0] if rows else None

	def close(self) -> None:
		with self._lock:
			self.conn.close()

	def __enter__(self) -> "ResumeDatabase":
		return self

	def __exit__(self, *exc) -> None:
		self.close()


_db: Optional[ResumeDatabase] = None
_db_lock = threading.Lock()


def get_database() -> ResumeDatabase:
	"""FastAPI dependency: the process-wide database at the configured path.

	Sync dependencies run in the threadpool, so the first open and the
	template seed happen under a lock.
	"""
	global _db
	if _db is not None:
		return _db
	with _db_lock:
		if _db is None:
			import app.config as cfg
			from app.services.templates import ensure_default_templates
			db = ResumeDatabase(cfg.DB_PATH)
			ensure_default_templates(db)
			_db = db
		return _db


def reset_database() -> None:
	global _db
	with _db_lock:
		if _db is not None:
			_db.close()
		_db = None
