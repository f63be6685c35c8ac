"""Pydantic schemas for the dialogs and the backend payloads."""

from app.schemas.common import EntityOption, EntityRef
from app.schemas.course import CourseForm, CoursePayload
from app.schemas.student import StudentForm, StudentPayload

__all__ = [
    "CourseForm",
    "CoursePayload",
    "EntityOption",
    "EntityRef",
    "StudentForm",
    "StudentPayload",
]
