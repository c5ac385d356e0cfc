from __future__ import annotations
from typing import Dict, List, Optional

SUMMARY_SUGGESTIONS = [
	"Results-driven professional with expertise in driving business growth and operational excellence.",
	"Experienced leader with a proven track record of delivering innovative solutions and managing high-performing teams.",
	"Detail-oriented professional with strong analytical skills and a passion for continuous improvement.",
	"Strategic thinker with excellent communication skills and ability to work effectively in fast-paced environments.",
]

SKILL_SUGGESTIONS: Dict[str, List[str]] = {
	"technology": [
		"JavaScript", "Python", "React", "Node.js", "AWS", "Docker", "Git", "SQL", "MongoDB", "TypeScript",
	],
	"marketing": [
		"Digital Marketing", "SEO/SEM", "Google Analytics", "Social Media Marketing",
		"Content Strategy", "Email Marketing", "A/B Testing", "Marketing Automation",
	],
}

GENERIC_SKILL_SUGGESTIONS = [
	"Project Management", "Data Analysis", "Communication", "Leadership",
	"Problem Solving", "Team Collaboration", "Time Management", "Critical Thinking",
]

RESPONSIBILITY_SUGGESTIONS = [
	"Led cross-functional teams to deliver projects on time and within budget",
	"Developed and implemented strategic initiatives that increased efficiency by 25%",
	"Collaborated with stakeholders to identify requirements and deliver solutions",
	"Managed client relationships and maintained 95% customer satisfaction rate",
	"Analyzed data to identify trends and opportunities for improvement",
	"Mentored junior team members and facilitated knowledge sharing sessions",
]

SUGGESTION_TYPES = ("summary", "skills", "responsibilities")


def get_suggestions(kind: str, industry: Optional[str] = None, job_title: Optional[str] = None) -> List[str]:
	"""Static content suggestions. job_title is accepted but does not change the result.

	Returns a fresh list each call; unknown kinds yield [].
	"""
	if kind == "summary":
		return list(SUMMARY_SUGGESTIONS)
	if kind == "skills":
		return list(SKILL_SUGGESTIONS.get(industry or "", GENERIC_SKILL_SUGGESTIONS))
	if kind == "responsibilities":
		return list(RESPONSIBILITY_SUGGESTIONS)
	return []
