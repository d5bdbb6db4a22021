from sqlmodel import SQLModel, Field
from typing import Optional, List, Iterable, Dict, Any
from datetime import datetime, timezone
import json

def encode_list(values: Optional[Iterable[str]]) -> str:
    # selections are sets: keep first occurrence, drop blanks
    seen: List[str] = []
    for v in values or []:
        v = str(v)
        if v.strip() and v not in seen:
            seen.append(v)
    return json.dumps(seen)

def decode_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    try:
        out = json.loads(raw)
    except ValueError:
        return []
    return [str(v) for v in out] if isinstance(out, list) else []

def _now() -> datetime:
    return datetime.now(timezone.utc)

class Submission(SQLModel, table=True):
    __tablename__ = "submissions"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never reused

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str
    personal_email: str
    start_date: str
    job_title: str
    department: Optional[str] = None
    manager: Optional[str] = None
    office: str
    is_manager: Optional[str] = None
    software_text: str = "[]"
    other_software: Optional[str] = None
    advanced_config: Optional[str] = None
    equipment_text: str = "[]"
    accessories_text: str = "[]"
    accessories_total: float = 0.0
    access_notes: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)

    @property
    def software(self) -> List[str]:
        return decode_list(self.software_text)

    @property
    def equipment(self) -> List[str]:
        return decode_list(self.equipment_text)

    @property
    def accessories(self) -> List[str]:
        return decode_list(self.accessories_text)

    def to_public(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fullName": self.full_name,
            "personalEmail": self.personal_email,
            "startDate": self.start_date,
            "jobTitle": self.job_title,
            "department": self.department,
            "manager": self.manager,
            "office": self.office,
            "isManager": self.is_manager,
            "software": self.software,
            "otherSoftware": self.other_software,
            "advancedConfig": self.advanced_config,
            "equipment": self.equipment,
            "accessories": self.accessories,
            "accessoriesTotal": self.accessories_total,
            "accessNotes": self.access_notes,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

class StepStatus(SQLModel, table=True):
    __tablename__ = "submission_status"

    # composite key: one row per (submission, step)
    submission_id: int = Field(foreign_key="submissions.id", primary_key=True, ondelete="CASCADE")
    step_index: int = Field(primary_key=True)
    is_complete: bool = False

    def to_public(self) -> Dict[str, Any]:
        return {"stepIndex": self.step_index, "isComplete": self.is_complete}

class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    created_at: datetime = Field(default_factory=_now)
