"""Add-student dialog routes."""

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
from app.services.student_form_service import StudentFormService
from app.utils.dependencies import dependencies

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])

DIALOG_TEMPLATE = "forms/student_form.html"
OPTIONS_URL = "/students/new/options"
CREATED_EVENT = "studentCreated"


@router.get("/new")
async def new_student_dialog(
    request: Request,
    form_id: Optional[str] = Query(default=None),
    service: StudentFormService = Depends(dependencies.student_form),
) -> Response:
    """Render an empty add-student dialog."""
    return render_dialog(
        request,
        DIALOG_TEMPLATE,
        service,
        OPTIONS_URL,
        form_id=form_id or new_form_id(),
        values=service.empty_values(),
    )


@router.get("/new/options")
async def course_options(
    request: Request,
    selected: List[str] = Query(default=[]),
    service: StudentFormService = Depends(dependencies.student_form),
) -> Response:
    """Render the selectable courses once they are fetched."""
    return await render_options(request, service, selected)


@router.post("/new/validate")
async def validate_student_field(
    request: Request,
    field: str = Query(..., description="Field that lost focus"),
    service: StudentFormService = Depends(dependencies.student_form),
) -> Response:
    """Validate a single field of the dialog."""
    raw = await read_form(request, service.relation_field)
    message = await service.validate_field(raw, field)
    return render_field_error(request, "student", field, message)


@router.post("")
async def create_student(
    request: Request,
    service: StudentFormService = Depends(dependencies.student_form),
) -> Response:
    """Submit the add-student dialog.

    Returns:
        Re-rendered dialog; notifications and the ``studentCreated`` event
        travel in the HX-Trigger header.
    """
    raw = await read_form(request, service.relation_field)
    form_id = raw.get("form_id") or new_form_id()
    events: Dict[str, Any] = {}

    def on_success(data: Any) -> None:
        events[CREATED_EVENT] = data
        logger.info("Student added", extra={"form_id": form_id})

    result = await service.submit(raw, form_id, on_success=on_success)
    return render_result(
        request, DIALOG_TEMPLATE, service, OPTIONS_URL, form_id, result, events
    )
