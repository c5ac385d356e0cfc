from __future__ import annotations


class ResumeServiceError(Exception):
	"""Base class for errors surfaced by the resume services."""
	status_code = 500


class ResumeNotFoundError(ResumeServiceError):
	status_code = 404

	def __init__(self, resume_id: int):
		super().__init__("resume not found")
		self.resume_id = resume_id


class InvalidArgumentError(ResumeServiceError):
	status_code = 400


class PersistenceError(ResumeServiceError):
	status_code = 500
