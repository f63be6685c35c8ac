"""Create-course dialog service."""

from app.schemas.course import CourseForm, CoursePayload
from app.services.base import BaseFormService


class CourseFormService(BaseFormService[CourseForm]):
    """Creates courses, offering existing students as enrollment options."""

    form_class = CourseForm
    payload_class = CoursePayload
    options_path = "/api/student"
    submit_path = "/api/course"
    relation_field = "students"

    unknown_option_message = "Unknown student"
    options_failure_message = "Could not get students data"
    success_message = "Course created successfully"
    failure_message = "Could not create course"
