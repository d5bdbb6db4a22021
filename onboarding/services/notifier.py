"""
Outbound transactional email through the Brevo SMTP API.

Best effort only: callers get an EmailResult back, nothing here raises on
provider or network failure.
"""
import html
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

import httpx

from onboarding.config import settings
from onboarding.logger import get_logger

logger = get_logger(__name__)

@dataclass
class EmailResult:
    ok: bool
    status_code: Optional[int]
    body: str

def send_email(to: str, subject: str, html_body: str, client: Optional[httpx.Client] = None) -> EmailResult:
    if not settings.BREVO_API_KEY:
        return EmailResult(False, None, "missing BREVO_API_KEY")
    payload = {
        "sender": {"name": settings.SENDER_NAME, "email": "no-reply@brevo.com"},
        "replyTo": {"email": settings.SENDER_EMAIL},
        "to": [{"email": to}],
        "subject": subject,
        "htmlContent": html_body,
    }
    headers = {"accept": "application/json", "api-key": settings.BREVO_API_KEY,
               "content-type": "application/json"}
    try:
        if client is None:
            with httpx.Client(timeout=settings.EMAIL_TIMEOUT_SECONDS) as c:
                r = c.post(settings.BREVO_API_URL, json=payload, headers=headers)
        else:
            r = client.post(settings.BREVO_API_URL, json=payload, headers=headers)
    except httpx.HTTPError as e:
        logger.warning("Email send failed", to=to, error=str(e))
        return EmailResult(False, None, str(e))
    if r.is_success:
        logger.info("Email sent", to=to, status=r.status_code)
    else:
        logger.warning("Email rejected", to=to, status=r.status_code, body=r.text[:500])
    return EmailResult(r.is_success, r.status_code, r.text)

def _v(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        return "—"
    return html.escape(str(value))

def _lines(values: Optional[Iterable[str]]) -> str:
    values = [v for v in values or [] if v]
    return html.escape(", ".join(values)) if values else "None"

def build_summary(data: Dict[str, Any], submission_id: Optional[int] = None) -> Tuple[str, str]:
    """Subject and HTML body describing one new-hire request."""
    head = [f"New Hire Request: {data.get('fullName', '')}"]
    if (data.get("jobTitle") or "").strip():
        head.append(data["jobTitle"].strip())
    head.append(f"Start {data.get('startDate', '')}")
    subject = " — ".join(head)

    software = _lines(data.get("software"))
    sections = [
        ("Contact", [
            ("Full Name", _v(data.get("fullName"))),
            ("Personal Email", _v(data.get("personalEmail"))),
            ("Start Date", _v(data.get("startDate"))),
            ("Job Title", _v(data.get("jobTitle"))),
            ("Department", _v(data.get("department"))),
            ("Manager", _v(data.get("manager"))),
            ("Office", _v(data.get("office"))),
        ]),
        ("Role & Software", [
            ("Is Manager", _v(data.get("isManager"))),
            ("Software", software),
        ] + ([("Other Software Details", _v(data["otherSoftware"]))] if data.get("otherSoftware") else [])),
        ("Equipment", [
            ("Advanced Technical Config", _v(data.get("advancedConfig"))),
            ("Equipment", _lines(data.get("equipment"))),
            ("Accessories", _lines(data.get("accessories"))),
            ("Accessories Total", f"${float(data.get('accessoriesTotal') or 0):,.2f}"),
        ]),
        ("Notes", [
            ("Systems / Access Notes", _v(data.get("accessNotes"))),
            ("Additional Notes", _v(data.get("notes"))),
        ]),
    ]
    parts = ["<h2>New Hire Request</h2>"]
    if submission_id is not None:
        parts.append(f"<p>Submission #{submission_id}</p>")
    for title, rows in sections:
        parts.append(f"<h3>{html.escape(title)}</h3><ul>")
        parts.extend(f"<li><b>{html.escape(k)}:</b> {v}</li>" for k, v in rows)
        parts.append("</ul>")
    return subject, "\n".join(parts)

def notify_new_submission(submission_id: int, data: Dict[str, Any],
                          client: Optional[httpx.Client] = None) -> bool:
    if not settings.BREVO_API_KEY or not settings.NOTIFY_EMAIL:
        logger.info("Submission email skipped", submission_id=submission_id, reason="email not configured")
        return False
    subject, body = build_summary(data, submission_id)
    return send_email(settings.NOTIFY_EMAIL, subject, body, client=client).ok
