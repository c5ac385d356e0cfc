from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Section ids used by customization.sectionOrder
SECTION_IDS = ("personal", "summary", "experience", "education", "skills", "additional")

DEFAULT_SECTION_ORDER = ["personal", "summary", "experience", "education", "skills"]

# Keys of additionalSections, in display order
ADDITIONAL_SECTION_KEYS = ("certifications", "projects", "volunteer", "awards", "publications", "associations")

Layout = Literal["single-column", "two-column"]


class CamelModel(BaseModel):
	"""Wire format is camelCase; attributes stay snake_case."""
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(CamelModel):
	full_name: str = ""
	professional_title: str = ""
	phone: str = ""
	email: str = ""
	linked_in: Optional[str] = None
	portfolio: Optional[str] = None
	location: str = ""
	headshot: Optional[str] = None


class WorkExperience(CamelModel):
	id: str
	job_title: str = ""
	company: str = ""
	start_date: str = ""
	end_date: Optional[str] = None
	is_current_job: bool = False
	location: str = ""
	responsibilities: List[str] = []


class Education(CamelModel):
	id: str
	degree: str = ""
	field_of_study: str = ""
	institution: str = ""
	graduation_date: str = ""
	gpa: Optional[str] = None
	coursework: Optional[List[str]] = None
	honors: Optional[List[str]] = None


class SkillItem(CamelModel):
	name: str
	proficiency: int = 3  # 1-5
	category: str = ""


class LanguageSkill(CamelModel):
	language: str
	proficiency: str = "Conversational"  # Native, Fluent, Conversational, Basic


class Skills(CamelModel):
	technical: List[SkillItem] = []
	soft: List[str] = []
	languages: List[LanguageSkill] = []


class Certification(CamelModel):
	id: str
	name: str = ""
	issuer: str = ""
	date: str = ""
	expiration_date: Optional[str] = None


class Project(CamelModel):
	id: str
	name: str = ""
	description: str = ""
	technologies: List[str] = []
	url: Optional[str] = None
	start_date: str = ""
	end_date: Optional[str] = None


class VolunteerExperience(CamelModel):
	id: str
	organization: str = ""
	role: str = ""
	start_date: str = ""
	end_date: Optional[str] = None
	description: str = ""


class Award(CamelModel):
	id: str
	name: str = ""
	issuer: str = ""
	date: str = ""
	description: Optional[str] = None


class Publication(CamelModel):
	id: str
	title: str = ""
	publisher: str = ""
	date: str = ""
	url: Optional[str] = None


class AdditionalSections(CamelModel):
	certifications: Optional[List[Certification]] = None
	projects: Optional[List[Project]] = None
	volunteer: Optional[List[VolunteerExperience]] = None
	awards: Optional[List[Award]] = None
	publications: Optional[List[Publication]] = None
	associations: Optional[List[str]] = None


class Customization(CamelModel):
	font: str = "Inter"
	color_scheme: str = "blue"
	layout: Layout = "two-column"
	section_order: List[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_ORDER))
	spacing: float = 1


class Resume(CamelModel):
	id: int
	user_id: str
	title: str
	template_id: str
	personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
	professional_summary: str = ""
	work_experience: List[WorkExperience] = []
	education: List[Education] = []
	skills: Skills = Field(default_factory=Skills)
	additional_sections: AdditionalSections = Field(default_factory=AdditionalSections)
	customization: Customization = Field(default_factory=Customization)
	created_at: datetime
	updated_at: datetime


class Template(CamelModel):
	id: str
	name: str
	category: str
	preview_image: Optional[str] = None
	is_active: bool = True
	created_at: datetime


# Requests

class CreateResumeRequest(CamelModel):
	user_id: str
	title: Optional[str] = None
	template_id: str


class UpdateResumeRequest(CamelModel):
	"""Every field optional; only the ones the caller sent are written."""
	title: Optional[str] = None
	template_id: Optional[str] = None
	personal_info: Optional[PersonalInfo] = None
	professional_summary: Optional[str] = None
	work_experience: Optional[List[WorkExperience]] = None
	education: Optional[List[Education]] = None
	skills: Optional[Skills] = None
	additional_sections: Optional[AdditionalSections] = None
	customization: Optional[Customization] = None


# Responses

class ResumeEnvelope(CamelModel):
	resume: Resume


class ResumeList(CamelModel):
	resumes: List[Resume]


class TemplateList(CamelModel):
	templates: List[Template]


class SuggestionList(CamelModel):
	suggestions: List[str]


class AtsReport(CamelModel):
	score: int
	issues: List[str]


class SectionStatus(CamelModel):
	personal: bool
	summary: bool
	experience: bool
	education: bool
	skills: bool
	additional: bool


class ReviewReport(CamelModel):
	completeness: int
	ats: AtsReport
	sections: SectionStatus
