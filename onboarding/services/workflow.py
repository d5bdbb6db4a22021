"""
Step progression rules for a submission.

The board is permissive: any step may be marked complete or incomplete in
any order. STRICT_PROGRESSION turns on forward-only rules.
"""
from typing import Iterable, List, Optional
from sqlmodel import Session
from onboarding.config import settings
from onboarding.errors import NotFound, ValidationError
from onboarding.logger import get_logger
from onboarding.models import StepStatus
from onboarding.services import steps, submissions

logger = get_logger(__name__)

def progress(rows: Iterable[StepStatus]) -> List[bool]:
    """Expand stored rows into one flag per catalog step; absent rows are incomplete."""
    flags = [False] * steps.STEP_COUNT
    for r in rows:
        if steps.is_valid(r.step_index):
            flags[r.step_index - 1] = bool(r.is_complete)
    return flags

def check_strict(flags: List[bool], step_index: int, is_complete: bool) -> None:
    if is_complete and step_index > 1 and not flags[step_index - 2]:
        raise ValidationError(f"Step {step_index - 1} must be complete first")
    if not is_complete and step_index < steps.STEP_COUNT and flags[step_index]:
        raise ValidationError(f"Step {step_index + 1} must be reopened first")

def set_step(session: Session, submission_id: int, step_index: int, is_complete: bool,
             strict: Optional[bool] = None) -> StepStatus:
    if not submission_id or not step_index:
        raise ValidationError("Missing submissionId or stepIndex")
    if not steps.is_valid(step_index):
        raise ValidationError("Invalid stepIndex")
    if not submissions.exists(session, submission_id):
        raise NotFound("Submission not found")
    strict = settings.STRICT_PROGRESSION if strict is None else strict
    if strict:
        check_strict(progress(submissions.get_status(session, submission_id)), step_index, is_complete)
    row = submissions.upsert_status(session, submission_id, step_index, bool(is_complete))
    logger.info("Step status updated", submission_id=submission_id, step_index=step_index,
                step=steps.label(step_index), is_complete=row.is_complete)
    return row
