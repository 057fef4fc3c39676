"""Pydantic schemas for candidate requests and responses."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from app.models.candidate import Candidate

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
MAX_EXPERIENCE_YEARS = 50

# Digits, spaces and + - . ( ), 7 to 20 characters
_PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-().]{7,20}$")


class CandidateCreateRequest(BaseModel):
    """Payload for creating a candidate."""

    first_name: str = Field(..., description="Given name (2-50 characters).")
    last_name: str = Field(..., description="Family name (2-50 characters).")
    email: EmailStr = Field(..., description="Contact email; unique across candidates.")
    phone: str = Field(
        default="",
        description="Optional phone number (digits, spaces and + - . ( ) only).",
    )
    experience_years: int = Field(
        default=0,
        ge=0,
        le=MAX_EXPERIENCE_YEARS,
        description="Years of professional experience (0-50).",
    )
    skills: list[str] = Field(
        default_factory=list,
        description="Skill names; blank entries are dropped.",
    )

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _strip_names(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("first_name", "last_name")
    @classmethod
    def _check_name_length(cls, value: str, info: ValidationInfo) -> str:
        if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
            label = info.field_name.replace("_", " ").capitalize()
            raise ValueError(
                f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        return value

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return ""
        if not _PHONE_PATTERN.match(value) or not any(ch.isdigit() for ch in value):
            raise ValueError("Invalid phone format")
        return value

    @field_validator("skills")
    @classmethod
    def _normalize_skills(cls, value: list[str]) -> list[str]:
        return [skill.strip() for skill in value if skill and skill.strip()]

    def to_entity(self) -> Candidate:
        return Candidate(
            first_name=self.first_name,
            last_name=self.last_name,
            email=str(self.email),
            phone=self.phone,
            experience_years=self.experience_years,
            skills=list(self.skills),
        )


class CandidateUpdateRequest(CandidateCreateRequest):
    """Payload for replacing a candidate (PUT); same rules as create."""


class CandidateResponse(BaseModel):
    """Candidate as returned by the API."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    experience_years: int
    skills: list[str]
    applied_date: datetime | None
    full_name: str = Field(..., description="First and last name joined by a space.")
    is_senior: bool = Field(..., description="True with 5 or more years of experience.")

    @classmethod
    def from_entity(cls, candidate: Candidate) -> "CandidateResponse":
        return cls(
            id=candidate.id,
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            email=candidate.email,
            phone=candidate.phone,
            experience_years=candidate.experience_years,
            skills=list(candidate.skills),
            applied_date=candidate.applied_date,
            full_name=candidate.full_name,
            is_senior=candidate.is_senior,
        )
