from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

NAME_MAX_LENGTH  = 50
EMAIL_MAX_LENGTH = 150
DEPARTMENT_ID_MAX = 2_147_483_647   # INTEGER column


# ─── Request ──────────────────────────────────────────────────────────────────
class UserCreateRequest(BaseModel):
    name:         str
    email:        str
    departmentId: Annotated[int, Field(strict=True, ge=1, le=DEPARTMENT_ID_MAX)]

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        v = v.strip()
        if not v: raise ValueError("Name is required")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must be at most {NAME_MAX_LENGTH} characters")
        return v

    # Syntax check only: the address is stored exactly as submitted
    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        v = v.strip()
        if not v: raise ValueError("Email is required")
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
        try:
            validate_email(v, check_deliverability=False, allow_display_name=False)
        except EmailNotValidError:
            raise ValueError("Email must be a valid email address")
        return v


# ─── Response ─────────────────────────────────────────────────────────────────
class UserCreatedOut(BaseModel):
    name:         str
    email:        str
    departmentId: int

    model_config = {"from_attributes": True}


class UsersByDepartmentOut(BaseModel):
    departmentId:   int
    departmentName: str
    userCount:      int
