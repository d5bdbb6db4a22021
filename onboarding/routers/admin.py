from fastapi import APIRouter, Depends, Request
from sqlmodel import Session
from onboarding.deps import client_host, get_session, require_admin
from onboarding.schemas import LoginIn, StatusUpdateIn
from onboarding.services import auth, submissions, workflow

router = APIRouter()

@router.post("/login")
def login(payload: LoginIn, request: Request, session: Session = Depends(get_session)):
    token = auth.login(session, payload.email, payload.password, client=client_host(request))
    return {"token": token}

@router.get("/submissions")
def list_submissions(principal: auth.Principal = Depends(require_admin),
                     session: Session = Depends(get_session)):
    return [s.to_public() for s in submissions.list_all(session)]

@router.post("/update-status")
def update_status(payload: StatusUpdateIn, principal: auth.Principal = Depends(require_admin),
                  session: Session = Depends(get_session)):
    workflow.set_step(session, payload.submissionId, payload.stepIndex, payload.isComplete)
    return {"success": True}
