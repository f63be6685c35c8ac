"""Create-course dialog routes."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.dialogs import (
    new_form_id,
    read_form,
    render_dialog,
    render_field_error,
    render_options,
    render_result,
)
from app.services.course_form_service import CourseFormService
from app.utils.dependencies import dependencies

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["Courses"])

DIALOG_TEMPLATE = "forms/course_form.html"
OPTIONS_URL = "/courses/new/options"
CREATED_EVENT = "courseCreated"


@router.get("/new")
async def new_course_dialog(
    request: Request,
    form_id: Optional[str] = Query(default=None),
    service: CourseFormService = Depends(dependencies.course_form),
) -> Response:
    """Render an empty create-course dialog.

    Passing the ``form_id`` of a dialog whose submission is in flight renders
    its submit button disabled.
    """
    return render_dialog(
        request,
        DIALOG_TEMPLATE,
        service,
        OPTIONS_URL,
        form_id=form_id or new_form_id(),
        values=service.empty_values(),
    )


@router.get("/new/options")
async def student_options(
    request: Request,
    selected: List[str] = Query(default=[]),
    service: CourseFormService = Depends(dependencies.course_form),
) -> Response:
    """Render the selectable students once they are fetched.

    Args:
        request: Incoming request.
        selected: Student ids to render as selected.
        service: CourseFormService instance.

    Returns:
        ``<option>`` list; an error toast is triggered when the fetch fails.
    """
    return await render_options(request, service, selected)


@router.post("/new/validate")
async def validate_course_field(
    request: Request,
    field: str = Query(..., description="Field that lost focus"),
    service: CourseFormService = Depends(dependencies.course_form),
) -> Response:
    """Validate a single field of the dialog."""
    raw = await read_form(request, service.relation_field)
    message = await service.validate_field(raw, field)
    return render_field_error(request, "course", field, message)


@router.post("")
async def create_course(
    request: Request,
    service: CourseFormService = Depends(dependencies.course_form),
) -> Response:
    """Submit the create-course dialog.

    Args:
        request: Incoming request with the urlencoded dialog.
        service: CourseFormService instance.

    Returns:
        Re-rendered dialog; notifications and the ``courseCreated`` event
        travel in the HX-Trigger header.

    Raises:
        SubmissionInProgressError: If the same dialog is already submitting.
    """
    raw = await read_form(request, service.relation_field)
    form_id = raw.get("form_id") or new_form_id()
    events: Dict[str, Any] = {}

    def on_success(data: Any) -> None:
        events[CREATED_EVENT] = data
        logger.info("Course created", extra={"form_id": form_id})

    result = await service.submit(raw, form_id, on_success=on_success)
    return render_result(
        request, DIALOG_TEMPLATE, service, OPTIONS_URL, form_id, result, events
    )
