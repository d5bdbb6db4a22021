from fastapi import APIRouter
from fastapi.responses import Response
from onboarding.config import settings
from onboarding.errors import AppError
from onboarding.schemas import EmailIn
from onboarding.services import notifier

router = APIRouter()

@router.post("/newhire-email")
def relay_newhire_email(payload: EmailIn):
    if not settings.BREVO_API_KEY:
        raise AppError("Server not configured (missing BREVO_API_KEY)")
    result = notifier.send_email(payload.to, payload.subject, payload.html)
    if result.status_code is None:
        raise AppError()
    # provider status and body are passed through as-is
    return Response(content=result.body, status_code=result.status_code, media_type="application/json")
