from fastapi import APIRouter, BackgroundTasks, Depends
from sqlmodel import Session
from onboarding.deps import get_session, parse_id
from onboarding.schemas import SubmissionIn
from onboarding.services import notifier, steps, submissions

router = APIRouter()

@router.get("/steps")
def list_steps():
    return steps.labels()

@router.post("/submit")
def submit(payload: SubmissionIn, background: BackgroundTasks, session: Session = Depends(get_session)):
    data = payload.model_dump()
    submission_id = submissions.create(session, data)
    # runs after the response is sent; its outcome never reaches the submitter
    background.add_task(notifier.notify_new_submission, submission_id, data)
    return {"success": True, "submissionId": submission_id}

@router.get("/submission/{submission_id}")
def get_submission(submission_id: str, session: Session = Depends(get_session)):
    sub, rows = submissions.get_by_id(session, parse_id(submission_id))
    return {"submission": sub.to_public(), "steps": steps.labels(),
            "status": [r.to_public() for r in rows]}

@router.get("/status/{submission_id}")
def get_status(submission_id: str, session: Session = Depends(get_session)):
    return [r.to_public() for r in submissions.get_status(session, parse_id(submission_id))]
