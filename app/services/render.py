from __future__ import annotations
from typing import List
from jinja2 import Environment, FileSystemLoader, select_autoescape
from app.config import VIEWS_DIR
from app.models.schema import SECTION_IDS, Resume

EXPORT_TEMPLATES = {
	"markdown": "resume.md.j2",
	"text": "resume.txt.j2",
}


def _env() -> Environment:
	return Environment(
		loader=FileSystemLoader(str(VIEWS_DIR)),
		autoescape=select_autoescape(["html", "xml"]),
		trim_blocks=True,
		lstrip_blocks=True,
	)


def export_section_order(resume: Resume) -> List[str]:
	"""Sections in customization order; unknown ids and repeats dropped, additional always last if missing."""
	order: List[str] = []
	for sid in resume.customization.section_order:
		if sid in SECTION_IDS and sid not in order:
			order.append(sid)
	if "additional" not in order:
		order.append("additional")
	return order


def render_resume(resume: Resume, fmt: str = "markdown") -> str:
	if fmt not in EXPORT_TEMPLATES:
		raise ValueError(f"unsupported export format: {fmt}")
	tpl = _env().get_template(EXPORT_TEMPLATES[fmt])
	return tpl.render(resume=resume, sections=export_section_order(resume))
