import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlmodel import Session
from onboarding.config import settings
from onboarding.deps import engine, init_db
from onboarding.errors import AppError
from onboarding.logger import configure_logging, get_logger
from onboarding.routers import admin, gate, intake, mail
from onboarding.services import auth

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    with Session(engine) as session:
        auth.bootstrap_admin(session)
    logger.info("Onboarding API started", db=settings.DB_URL.split("://")[0])
    yield
    engine.dispose()
    logger.info("Onboarding API stopped")

app = FastAPI(title="New Hire Onboarding", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGIN,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    err = errors[0]
    kind = err.get("type")
    ctx_error = (err.get("ctx") or {}).get("error")
    if kind == "value_error" and ctx_error is not None:
        return str(ctx_error)
    field = next((p for p in reversed(err.get("loc", ())) if isinstance(p, str) and p != "body"), None)
    if field is None:
        return "Invalid request body"
    return f"Missing {field}" if kind == "missing" else f"Invalid {field}"

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

@app.get("/health")
def health():
    return {"ok": True}

app.include_router(gate.router, tags=["gate"])
app.include_router(intake.router, prefix="/api", tags=["intake"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
app.include_router(mail.router, prefix="/api", tags=["mail"])

_assets = os.path.join(settings.PUBLIC_DIR, "assets")
if os.path.isdir(_assets):
    app.mount("/assets", StaticFiles(directory=_assets), name="assets")
