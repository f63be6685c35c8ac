"""Add-student dialog service."""

from app.schemas.student import StudentForm, StudentPayload
from app.services.base import BaseFormService


class StudentFormService(BaseFormService[StudentForm]):
    """Adds students, offering existing courses to enroll them in."""

    form_class = StudentForm
    payload_class = StudentPayload
    options_path = "/api/course"
    submit_path = "/api/student"
    relation_field = "courses"

    unknown_option_message = "Unknown course"
    options_failure_message = "Could not get courses data"
    success_message = "Student added successfully"
    failure_message = "Could not add student"
