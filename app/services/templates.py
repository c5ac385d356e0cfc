from __future__ import annotations
from typing import List
import logging
from app.models.schema import Template
from app.services.database import ResumeDatabase

logger = logging.getLogger(__name__)

# Seed catalog: (id, name, category, preview_image)
DEFAULT_TEMPLATES = [
	("modern-professional", "Modern Professional", "Modern", "/previews/modern-professional.png"),
	("modern-minimal", "Modern Minimal", "Modern", "/previews/modern-minimal.png"),
	("classic-executive", "Classic Executive", "Classic", "/previews/classic-executive.png"),
	("classic-traditional", "Classic Traditional", "Classic", "/previews/classic-traditional.png"),
	("creative-designer", "Creative Designer", "Creative", "/previews/creative-designer.png"),
	("creative-portfolio", "Creative Portfolio", "Creative", "/previews/creative-portfolio.png"),
	("ats-simple", "ATS Simple", "ATS-Friendly", "/previews/ats-simple.png"),
	("ats-standard", "ATS Standard", "ATS-Friendly", "/previews/ats-standard.png"),
]


def ensure_default_templates(db: ResumeDatabase) -> int:
	"""Seed the catalog when the templates table is empty. Returns rows inserted."""
	row = db.query_one("SELECT COUNT(*) AS n FROM templates")
	if row and row["n"]:
		return 0
	now = db.now()
	for tid, name, category, preview in DEFAULT_TEMPLATES:
		db.execute(
			"INSERT OR IGNORE INTO templates (id, name, category, preview_image, is_active, created_at) VALUES (?, ?, ?, ?, 1, ?)",
			(tid, name, category, preview, now),
		)
	logger.info("templates: seeded count=%d", len(DEFAULT_TEMPLATES))
	return len(DEFAULT_TEMPLATES)


def list_templates(db: ResumeDatabase) -> List[Template]:
	rows = db.query(
		"SELECT id, name, category, preview_image, is_active, created_at "
		"FROM templates WHERE is_active = 1 ORDER BY category, name"
	)
	return [
		Template(
			id=r["id"],
			name=r["name"],
			category=r["category"],
			preview_image=r["preview_image"],
			is_active=bool(r["is_active"]),
			created_at=r["created_at"],
		)
		for r in rows
	]
