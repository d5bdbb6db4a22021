"""
Admin authentication: bootstrap account, password login and signed session tokens.
"""
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

import bcrypt
import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from onboarding.config import Settings, settings
from onboarding.errors import AuthError, RateLimited, StoreError
from onboarding.logger import get_logger
from onboarding.models import AdminUser

logger = get_logger(__name__)

ALGORITHM = "HS256"
INVALID_LOGIN = "Invalid login"

@dataclass(frozen=True)
class Principal:
    account_id: int
    email: str

class LoginRateLimiter:
    """Fixed-window attempt counter per client, held in process memory."""

    def __init__(self, max_attempts: int, window_seconds: float,
                 clock: Callable[[], float] = time.monotonic):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        """Record one attempt; False once the client is over the limit for this window."""
        now = self._clock()
        with self._lock:
            start, count = self._hits.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            count += 1
            self._hits[key] = (start, count)
            if len(self._hits) > 4096:
                self._prune(now)
            return count <= self.max_attempts

    def _prune(self, now: float) -> None:
        for k in [k for k, (start, _) in self._hits.items() if now - start >= self.window_seconds]:
            del self._hits[k]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

limiter = LoginRateLimiter(settings.LOGIN_MAX_ATTEMPTS, settings.LOGIN_WINDOW_SECONDS)

def hash_password(password: str, rounds: Optional[int] = None) -> str:
    if len(password.encode("utf-8")) > 72:
        raise ValueError("password cannot be longer than 72 bytes")
    salt = bcrypt.gensalt(rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash or over-long password
        return False

_dummy_hash: Optional[str] = None

def _dummy() -> str:
    # unknown emails still pay for one bcrypt check
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password")
    return _dummy_hash

def _normalize(email: str) -> str:
    return (email or "").strip().lower()

def bootstrap_admin(session: Session, cfg: Settings = settings) -> Optional[AdminUser]:
    """Create the configured admin account if, and only if, no admin exists yet."""
    if not (cfg.ADMIN_EMAIL and cfg.ADMIN_PASSWORD):
        logger.info("Admin bootstrap skipped", reason="no credentials configured")
        return None
    count = session.exec(select(func.count()).select_from(AdminUser)).one()
    if count:
        logger.info("Admin bootstrap skipped", reason="accounts exist", accounts=count)
        return None
    try:
        hashed = hash_password(cfg.ADMIN_PASSWORD, cfg.BCRYPT_ROUNDS)
    except ValueError as e:
        logger.error("Admin bootstrap skipped", reason="unusable password", error=str(e))
        return None
    user = AdminUser(email=_normalize(cfg.ADMIN_EMAIL), password_hash=hashed)
    session.add(user); session.commit(); session.refresh(user)
    logger.info("Admin bootstrap account created", email=user.email)
    return user

def issue_token(user: AdminUser, now: Optional[datetime] = None, secret: Optional[str] = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "iat": now,
        "exp": now + timedelta(hours=settings.TOKEN_TTL_HOURS),
    }
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=ALGORITHM)

def verify(token: Optional[str]) -> Principal:
    if not token:
        raise AuthError("Missing token")
    try:
        data = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
        return Principal(account_id=int(data["sub"]), email=str(data["email"]))
    except (jwt.PyJWTError, KeyError, TypeError, ValueError):
        # expired and tampered tokens are reported the same way
        raise AuthError("Invalid token")

def login(session: Session, email: str, password: str, client: str = "unknown") -> str:
    if not limiter.hit(client):
        logger.warning("Login rate limit exceeded", client=client)
        raise RateLimited()
    try:
        user = session.exec(select(AdminUser).where(AdminUser.email == _normalize(email))).first()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Store failure", op="login", error=str(e))
        raise StoreError() from e
    if user is None:
        check_password(password, _dummy())
        logger.info("Admin login failed", email=_normalize(email), client=client)
        raise AuthError(INVALID_LOGIN)
    if not check_password(password, user.password_hash):
        logger.info("Admin login failed", email=user.email, client=client)
        raise AuthError(INVALID_LOGIN)
    logger.info("Admin login", email=user.email, client=client)
    return issue_token(user)
