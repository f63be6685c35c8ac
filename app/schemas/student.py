"""Student schemas for the add-student dialog."""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import (
    EntityOption,
    EntityRef,
    email_address,
    optional_text,
    positive_integer,
    required_text,
    to_refs,
)


class StudentForm(BaseModel):
    """Input of the add-student dialog.

    Attributes:
        name: Student full name.
        email: Contact email, format-checked only.
        age: Age in years.
        gender: Free text, may be blank.
        courses: Courses selected from the fetched options.
    """

    name: str
    email: str
    age: int
    gender: str = ""
    courses: List[EntityOption] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        return required_text(value, "Student name is required")

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        return email_address(value)

    @field_validator("age", mode="before")
    @classmethod
    def _check_age(cls, value: Any) -> int:
        return positive_integer(value, "Age is required")

    @field_validator("gender", mode="before")
    @classmethod
    def _check_gender(cls, value: Any) -> str:
        return optional_text(value)


class StudentPayload(BaseModel):
    """Body of ``POST /api/student``."""

    name: str
    email: str
    age: int
    gender: str
    courses: List[EntityRef]

    @classmethod
    def from_form(cls, form: StudentForm) -> "StudentPayload":
        return cls(
            name=form.name,
            email=form.email,
            age=form.age,
            gender=form.gender,
            courses=to_refs(form.courses),
        )
