"""
Submission repository: intake, lookup and per-step status rows.

Multi-value selections are encoded here and decoded on the model, so the
store only ever sees JSON array text.
"""
import math
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select
from onboarding.errors import NotFound, StoreError, ValidationError
from onboarding.logger import get_logger
from onboarding.models import StepStatus, Submission, encode_list
from onboarding.services import steps

logger = get_logger(__name__)

REQUIRED_FIELDS = ("fullName", "personalEmail", "startDate", "jobTitle", "office")

def missing_field(payload: Dict[str, Any]) -> Optional[str]:
    for name in REQUIRED_FIELDS:
        value = payload.get(name)
        if value is None or not str(value).strip():
            return name
    return None

@contextmanager
def _store(session: Session, op: str):
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Store failure", op=op, error=str(e))
        raise StoreError() from e

def create(session: Session, payload: Dict[str, Any]) -> int:
    missing = missing_field(payload)
    if missing:
        raise ValidationError(f"Missing {missing}")
    try:
        total = float(payload.get("accessoriesTotal") or 0)
    except (TypeError, ValueError):
        raise ValidationError("Invalid accessoriesTotal")
    if not math.isfinite(total):
        raise ValidationError("Invalid accessoriesTotal")
    sub = Submission(
        full_name=payload["fullName"],
        personal_email=payload["personalEmail"],
        start_date=payload["startDate"],
        job_title=payload["jobTitle"],
        department=payload.get("department"),
        manager=payload.get("manager"),
        office=payload["office"],
        is_manager=payload.get("isManager"),
        software_text=encode_list(payload.get("software")),
        other_software=payload.get("otherSoftware"),
        advanced_config=payload.get("advancedConfig"),
        equipment_text=encode_list(payload.get("equipment")),
        accessories_text=encode_list(payload.get("accessories")),
        accessories_total=total,
        access_notes=payload.get("accessNotes"),
        notes=payload.get("notes"),
    )
    # submission and its step-1 row commit together
    with _store(session, "create"):
        session.add(sub)
        session.flush()
        session.add(StepStatus(submission_id=sub.id, step_index=steps.QUEUED_STEP, is_complete=True))
        session.commit()
        session.refresh(sub)
    logger.info("Submission created", submission_id=sub.id, office=sub.office)
    return sub.id

def exists(session: Session, submission_id: int) -> bool:
    with _store(session, "exists"):
        return session.get(Submission, submission_id) is not None

def get_by_id(session: Session, submission_id: int) -> Tuple[Submission, List[StepStatus]]:
    if not isinstance(submission_id, int) or submission_id <= 0:
        raise NotFound("Submission not found")
    with _store(session, "get_by_id"):
        sub = session.get(Submission, submission_id)
    if sub is None:
        raise NotFound("Submission not found")
    return sub, get_status(session, submission_id)

def list_all(session: Session) -> List[Submission]:
    # no pagination; fine at onboarding volumes
    with _store(session, "list_all"):
        return list(session.exec(select(Submission).order_by(Submission.id.desc())).all())

def get_status(session: Session, submission_id: int) -> List[StepStatus]:
    with _store(session, "get_status"):
        stmt = (select(StepStatus)
                .where(StepStatus.submission_id == submission_id)
                .order_by(StepStatus.step_index))
        return list(session.exec(stmt).all())

def upsert_status(session: Session, submission_id: int, step_index: int, is_complete: bool) -> StepStatus:
    if not submission_id or not step_index:
        raise ValidationError("Missing submissionId or stepIndex")
    key = (submission_id, step_index)
    with _store(session, "upsert_status"):
        row = session.get(StepStatus, key)
        if row is None:
            row = StepStatus(submission_id=submission_id, step_index=step_index, is_complete=is_complete)
            session.add(row)
        else:
            row.is_complete = is_complete
        try:
            session.commit()
        except IntegrityError:
            # lost an insert race, or the submission does not exist
            session.rollback()
            row = session.get(StepStatus, key)
            if row is None:
                raise NotFound("Submission not found")
            row.is_complete = is_complete
            session.commit()
        session.refresh(row)
    return row
