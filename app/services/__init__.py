"""Form services package."""

from app.services.base import BaseFormService, FormResult, FormState
from app.services.course_form_service import CourseFormService
from app.services.student_form_service import StudentFormService

__all__ = [
    "BaseFormService",
    "CourseFormService",
    "FormResult",
    "FormState",
    "StudentFormService",
]
