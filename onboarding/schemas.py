from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from onboarding.services.submissions import missing_field

class SubmissionIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fullName: Optional[str] = None
    personalEmail: Optional[str] = None
    startDate: Optional[str] = None
    jobTitle: Optional[str] = None
    department: Optional[str] = None
    manager: Optional[str] = None
    office: Optional[str] = None
    isManager: Optional[str] = None
    software: List[str] = Field(default_factory=list)
    otherSoftware: Optional[str] = None
    advancedConfig: Optional[str] = None
    equipment: List[str] = Field(default_factory=list)
    accessories: List[str] = Field(default_factory=list)
    accessoriesTotal: float = Field(default=0.0, allow_inf_nan=False)
    accessNotes: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("software", "equipment", "accessories", mode="before")
    @classmethod
    def _as_list(cls, v: Any):
        # a single checked box arrives as a bare string
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("accessoriesTotal", mode="before")
    @classmethod
    def _total(cls, v: Any):
        return 0.0 if v in (None, "") else v

    @model_validator(mode="after")
    def _required(self):
        missing = missing_field(self.model_dump())
        if missing:
            raise ValueError(f"Missing {missing}")
        return self

class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def _required(self):
        if not (self.email or "").strip() or not self.password:
            raise ValueError("Missing email or password")
        return self

class StatusUpdateIn(BaseModel):
    submissionId: Optional[int] = None
    stepIndex: Optional[int] = None
    isComplete: bool = False

    @model_validator(mode="after")
    def _required(self):
        # step indices are 1-based, so a zero is treated as absent
        if not self.submissionId or not self.stepIndex:
            raise ValueError("Missing submissionId or stepIndex")
        return self

class EmailIn(BaseModel):
    to: Optional[str] = None
    subject: Optional[str] = None
    html: Optional[str] = None

    @model_validator(mode="after")
    def _required(self):
        if not self.to or not self.subject or not self.html:
            raise ValueError("Missing to/subject/html")
        return self
