"""Course schemas for the create-course dialog."""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import (
    EntityOption,
    EntityRef,
    positive_integer,
    required_text,
    to_refs,
)


class CourseForm(BaseModel):
    """Input of the create-course dialog.

    Attributes:
        course: Course name.
        classroom: Classroom the course is held in.
        capacity: Maximum number of students.
        teacher: Teacher name.
        students: Students selected from the fetched options.
    """

    course: str
    classroom: str
    capacity: int
    teacher: str
    students: List[EntityOption] = Field(default_factory=list)

    @field_validator("course", mode="before")
    @classmethod
    def _check_course(cls, value: Any) -> str:
        return required_text(value, "Course name is required")

    @field_validator("classroom", mode="before")
    @classmethod
    def _check_classroom(cls, value: Any) -> str:
        return required_text(value, "Classroom name is required")

    @field_validator("capacity", mode="before")
    @classmethod
    def _check_capacity(cls, value: Any) -> int:
        return positive_integer(value, "Capacity is required")

    @field_validator("teacher", mode="before")
    @classmethod
    def _check_teacher(cls, value: Any) -> str:
        return required_text(value, "Teacher is required")


class CoursePayload(BaseModel):
    """Body of ``POST /api/course``."""

    name: str
    classroom: str
    capacity: int
    teacher: str
    students: List[EntityRef]

    @classmethod
    def from_form(cls, form: CourseForm) -> "CoursePayload":
        return cls(
            name=form.course,
            classroom=form.classroom,
            capacity=form.capacity,
            teacher=form.teacher,
            students=to_refs(form.students),
        )
