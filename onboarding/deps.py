from typing import Iterator, Optional
from fastapi import Header, Request
from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session
from onboarding.config import settings
from onboarding.errors import ValidationError
from onboarding.services import auth
import os

os.makedirs(settings.DATA_DIR, exist_ok=True)

# sqlite busy timeout bounds every store call
_connect_args = {"check_same_thread": False, "timeout": 5} if settings.DB_URL.startswith("sqlite") else {}
engine = create_engine(settings.DB_URL, echo=False, connect_args=_connect_args)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _sqlite_pragmas(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session

def init_db():
    # create_all only adds missing tables; existing rows are untouched
    SQLModel.metadata.create_all(engine)

def require_admin(authorization: Optional[str] = Header(default=None)) -> auth.Principal:
    token = None
    if authorization and authorization[:7].lower() == "bearer ":
        token = authorization[7:].strip()
    return auth.verify(token)

def client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"

def parse_id(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Invalid id")
    if value <= 0:
        raise ValidationError("Invalid id")
    return value
