import os
from fastapi import APIRouter, Cookie, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool
from typing import Optional
from onboarding.config import settings
from onboarding.deps import client_host
from onboarding.errors import AppError, RateLimited
from onboarding.logger import get_logger
from onboarding.services import auth, gate

router = APIRouter()
logger = get_logger(__name__)

def _page(name: str):
    path = os.path.join(settings.PUBLIC_DIR, name)
    return path if os.path.isfile(path) else None

@router.get("/")
def index(auth_cookie: Optional[str] = Cookie(default=None, alias=gate.COOKIE_NAME)):
    if not gate.is_authenticated(auth_cookie):
        return RedirectResponse(url="/login", status_code=303)
    page = _page("index.html")
    if page:
        return FileResponse(page)
    return PlainTextResponse("New Hire API up. POST /api/submit to file a request.")

@router.get("/login")
def login_page():
    page = _page("login.html")
    if page:
        return FileResponse(page)
    return PlainTextResponse("POST /login with a password to open the new hire form.")

async def _password_from(request: Request) -> Optional[str]:
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return None
    else:
        body = await request.form()
    value = body.get("password") if hasattr(body, "get") else None
    return value if isinstance(value, str) else None

@router.post("/login")
async def login(request: Request):
    if not auth.limiter.hit("gate:" + client_host(request)):
        raise RateLimited()
    password = await _password_from(request)
    if not password:
        return JSONResponse({"ok": False, "error": "Missing password"}, status_code=400)
    try:
        valid = await run_in_threadpool(gate.check_password, password)
    except AppError as e:
        logger.error("Form gate not configured")
        return JSONResponse({"ok": False, "error": e.message}, status_code=e.status_code)
    if not valid:
        logger.info("Form gate login failed", client=client_host(request))
        return JSONResponse({"ok": False, "error": "Invalid password"}, status_code=401)
    resp = JSONResponse({"ok": True})
    resp.set_cookie(gate.COOKIE_NAME, gate.issue_cookie(), max_age=gate.max_age_seconds(),
                    httponly=True, samesite="lax", secure=settings.COOKIE_SECURE)
    return resp

@router.post("/logout")
def logout():
    resp = JSONResponse({"ok": True})
    resp.delete_cookie(gate.COOKIE_NAME)
    return resp
