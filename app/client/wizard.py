from __future__ import annotations
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Set, Tuple
import logging
import threading
import app.config as cfg
from app.client.api import ApiError, ResumeApiClient
from app.client.autosave import DebouncedSaver
from app.client.store import Patch, ResumeStore
from app.models.schema import Resume
from app.services.scoring import ats_score, completeness_score

logger = logging.getLogger(__name__)

STEPS = (
    ("template", "Template"),
    ("personal", "Personal Info"),
    ("summary", "Summary"),
    ("experience", "Experience"),
    ("education", "Education"),
    ("skills", "Skills"),
    ("additional", "Additional"),
    ("customize", "Customize"),
    ("review", "Review"),
)
STEP_IDS = tuple(sid for sid, _ in STEPS)

DEFAULT_USER_ID = "user-1"


class WizardValidationError(Exception):
    """Forward move refused because the current step is incomplete."""

    def __init__(self, step: str, missing: List[str]):
        super().__init__(f"step '{step}' is missing required fields: {', '.join(missing)}")
        self.step = step
        self.missing = missing


class Notification(NamedTuple):
    level: str  # "info" | "error"
    title: str
    message: str


def missing_personal_fields(resume: Resume) -> List[str]:
    info = resume.personal_info
    missing = []
    for attr, label in (("full_name", "fullName"), ("email", "email"), ("phone", "phone")):
        if not getattr(info, attr):
            missing.append(label)
    return missing


class Wizard:
    """Linear step machine: template -> ... -> review, one step at a time."""

    def __init__(self, template_preselected: bool = False):
        self.index = STEP_IDS.index("personal") if template_preselected else 0

    @property
    def step(self) -> str:
        return STEP_IDS[self.index]

    @property
    def title(self) -> str:
        return STEPS[self.index][1]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_terminal(self) -> bool:
        return self.index == len(STEPS) - 1

    @property
    def progress(self) -> float:
        return (self.index + 1) / len(STEPS) * 100

    def can_advance(self, resume: Resume) -> bool:
        if self.is_terminal:
            return False
        if self.step == "personal":
            return not missing_personal_fields(resume)
        return True

    def next(self, resume: Resume) -> str:
        if self.is_terminal:
            return self.step
        if self.step == "personal":
            missing = missing_personal_fields(resume)
            if missing:
                raise WizardValidationError(self.step, missing)
        self.index += 1
        return self.step

    def back(self) -> str:
        if self.index > 0:
            self.index -= 1
        return self.step


class WizardSession:
    """One open resume in the builder.

    Edits go through pure transitions from app.client.store; every edit marks
    the touched top-level fields dirty and (re)schedules a debounced save that
    sends the latest value of each dirty field. close() cancels a pending save.
    """

    def __init__(
        self,
        api: ResumeApiClient,
        resume: Resume,
        template_preselected: bool = False,
        delay: Optional[float] = None,
        notify: Optional[Callable[[Notification], None]] = None,
        store: Optional[ResumeStore] = None,
    ):
        self.api = api
        self.resume_id = resume.id
        self.store = store or ResumeStore()
        self.store.put(resume)
        self.wizard = Wizard(template_preselected=template_preselected)
        self.notifications: List[Notification] = []
        self._notify_hook = notify
        self._dirty: Set[str] = set()
        self._lock = threading.Lock()
        self.saver = DebouncedSaver(self._save_dirty, cfg.AUTOSAVE_DELAY_SECONDS if delay is None else delay)

    @classmethod
    def open(
        cls,
        api: ResumeApiClient,
        resume_id: Optional[int] = None,
        template_id: Optional[str] = None,
        user_id: str = DEFAULT_USER_ID,
        **kwargs: Any,
    ) -> "WizardSession":
        """Load an existing resume, or create one for the pre-selected template."""
        if resume_id is not None:
            resume = api.get_resume(resume_id)
        elif template_id:
            resume = api.create_resume(user_id, template_id)
            logger.info("wizard: created resume id=%s template=%s", resume.id, template_id)
        else:
            raise ValueError("Please select a template to get started.")
        return cls(api, resume, template_preselected=bool(template_id), **kwargs)

    @property
    def resume(self) -> Resume:
        return self.store.get(self.resume_id)

    @property
    def dirty_fields(self) -> Set[str]:
        with self._lock:
            return set(self._dirty)

    def _notify(self, note: Notification) -> None:
        self.notifications.append(note)
        if self._notify_hook is not None:
            self._notify_hook(note)

    def edit(self, transition: Callable[..., Patch], *args: Any, **kwargs: Any) -> Resume:
        """Apply a transition to the working copy and schedule an auto-save.

        A transition that raises (unknown field, invalid value) leaves the
        session as it was: nothing is marked dirty or scheduled.
        """
        patch = transition(self.resume, *args, **kwargs)
        if not patch:
            return self.resume
        with self._lock:
            updated, _ = self.store.dispatch(self.resume_id, patch)
            self._dirty.update(patch)
        self.saver.schedule()
        return updated

    def _take_dirty(self) -> Tuple[Dict[str, Any], int]:
        with self._lock:
            current = self.store.get(self.resume_id)
            changes = {name: getattr(current, name) for name in sorted(self._dirty)}
            self._dirty.clear()
            return changes, self.store.version(self.resume_id)

    def _save_dirty(self) -> Optional[Resume]:
        changes, version = self._take_dirty()
        if not changes:
            return None
        try:
            saved = self.api.update_resume(self.resume_id, changes)
        except ApiError as e:
            logger.warning("wizard: save failed id=%s fields=%s error=%s", self.resume_id, ",".join(changes), e)
            with self._lock:
                self._dirty.update(changes)
            self._notify(Notification("error", "Error", "Failed to save resume. Please try again."))
            return None
        if not self.store.adopt(saved, version):
            logger.info("wizard: newer local edits kept over saved row id=%s", self.resume_id)
        self._notify(Notification("info", "Saved", "Your resume has been saved successfully."))
        return saved

    def save(self) -> Optional[Resume]:
        """Save dirty fields immediately, replacing any pending auto-save."""
        self.saver.cancel()
        return self._save_dirty()

    def flush(self) -> bool:
        return self.saver.flush()

    def next_step(self) -> str:
        return self.wizard.next(self.resume)

    def prev_step(self) -> str:
        return self.wizard.back()

    def completeness(self) -> int:
        return completeness_score(self.resume)

    def ats(self) -> Tuple[int, List[str]]:
        return ats_score(self.resume)

    def close(self) -> None:
        self.saver.close()
        pending = self.dirty_fields
        if pending:
            logger.info("wizard: closed with unsaved fields=%s", ",".join(sorted(pending)))

    def __enter__(self) -> "WizardSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
