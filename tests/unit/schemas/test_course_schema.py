"""Unit tests for course dialog schemas."""

import pytest
from pydantic import ValidationError

from app.schemas.common import EntityOption, error_messages
from app.schemas.course import CourseForm, CoursePayload


def _course_data(**overrides):
    data = {
        "course": "Biology II",
        "classroom": "101",
        "capacity": "33",
        "teacher": "Socrates",
        "students": [],
    }
    data.update(overrides)
    return data


def _errors(**overrides):
    with pytest.raises(ValidationError) as exc_info:
        CourseForm.model_validate(_course_data(**overrides))
    return error_messages(exc_info.value)


class TestCourseForm:
    """Tests for CourseForm field rules."""

    def test_valid_input(self):
        form = CourseForm.model_validate(_course_data())

        assert form.course == "Biology II"
        assert form.classroom == "101"
        assert form.capacity == 33
        assert form.teacher == "Socrates"
        assert form.students == []

    def test_text_fields_are_trimmed(self):
        form = CourseForm.model_validate(_course_data(course="  Biology II  "))
        assert form.course == "Biology II"

    @pytest.mark.parametrize(
        "field,message",
        [
            ("course", "Course name is required"),
            ("classroom", "Classroom name is required"),
            ("capacity", "Capacity is required"),
            ("teacher", "Teacher is required"),
        ],
    )
    def test_required_fields_reject_blank(self, field, message):
        assert _errors(**{field: ""})[field] == message

    def test_whitespace_only_is_blank(self):
        assert _errors(teacher="   ")["teacher"] == "Teacher is required"

    @pytest.mark.parametrize(
        "capacity,message",
        [
            ("0", "Needs to be positive"),
            ("-5", "Needs to be positive"),
            ("2.5", "Needs to be integer"),
            ("abc", "Needs to be a number"),
            ("NaN", "Needs to be a number"),
            ("Infinity", "Needs to be a number"),
            ("1e5000", "Needs to be a number"),
            ("1e1000000", "Needs to be a number"),
        ],
    )
    def test_capacity_rejects_invalid_numbers(self, capacity, message):
        assert _errors(capacity=capacity)["capacity"] == message

    @pytest.mark.parametrize(
        "capacity,expected", [("1", 1), ("40.0", 40), (12, 12), ("4e1", 40)]
    )
    def test_capacity_accepts_positive_integers(self, capacity, expected):
        assert CourseForm.model_validate(_course_data(capacity=capacity)).capacity == expected

    def test_reports_every_invalid_field(self):
        errors = _errors(course="", classroom="", capacity="0", teacher="")
        assert set(errors) == {"course", "classroom", "capacity", "teacher"}

    def test_students_default_to_empty(self):
        data = _course_data()
        del data["students"]
        assert CourseForm.model_validate(data).students == []


class TestCoursePayload:
    """Tests for the POST /api/course body."""

    def test_reduces_students_to_id_references(self):
        form = CourseForm.model_validate(
            _course_data(
                students=[
                    EntityOption(id=1, name="Ada Lovelace", email="ada@school.edu"),
                    EntityOption(id=3, name="Grace Hopper"),
                ]
            )
        )

        payload = CoursePayload.from_form(form).model_dump(mode="json")

        assert payload == {
            "name": "Biology II",
            "classroom": "101",
            "capacity": 33,
            "teacher": "Socrates",
            "students": [{"id": 1}, {"id": 3}],
        }

    def test_course_field_becomes_name(self):
        form = CourseForm.model_validate(_course_data(course="Algebra"))
        assert CoursePayload.from_form(form).name == "Algebra"

    def test_keeps_string_ids(self):
        form = CourseForm.model_validate(
            _course_data(students=[EntityOption(id="stu-9", name="Linus")])
        )
        payload = CoursePayload.from_form(form).model_dump(mode="json")
        assert payload["students"] == [{"id": "stu-9"}]
