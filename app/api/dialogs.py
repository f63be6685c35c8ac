"""Rendering helpers shared by the course and student dialog routes."""

import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import urlencode

from fastapi import Request, Response

from app.services.base import BaseFormService, FormResult
from app.utils.notifications import Notification, hx_trigger_header
from app.utils.templates import templates


def new_form_id() -> str:
    """Identifier of a freshly opened dialog."""
    return uuid.uuid4().hex


async def read_form(request: Request, relation_field: str) -> Dict[str, Any]:
    """Read a urlencoded dialog body, keeping every value of the multi-select."""
    form = await request.form()
    raw: Dict[str, Any] = {key: form.get(key) for key in form.keys()}
    raw[relation_field] = form.getlist(relation_field)
    return raw


def set_hx_trigger(
    response: Response,
    notifications: Iterable[Notification],
    events: Optional[Dict[str, Any]] = None,
) -> Response:
    """Attach notifications and client events to a response."""
    header = hx_trigger_header(notifications, events)
    if header is not None:
        response.headers["HX-Trigger"] = header
    return response


def render_dialog(
    request: Request,
    template: str,
    service: BaseFormService,
    options_url: str,
    form_id: str,
    values: Mapping[str, Any],
    errors: Optional[Mapping[str, str]] = None,
) -> Response:
    """Render a dialog form.

    Args:
        request: Incoming request.
        template: Dialog template name.
        service: Form service the dialog belongs to.
        options_url: Endpoint rendering the multi-select options.
        form_id: Identifier of the dialog.
        values: Current field values.
        errors: Inline field errors.

    Returns:
        Rendered template response.
    """
    selected: List[str] = list(values.get(service.relation_field) or [])
    query = urlencode([("selected", item) for item in selected])

    return templates.TemplateResponse(
        request=request,
        name=template,
        context={
            "form_id": form_id,
            "values": values,
            "errors": dict(errors or {}),
            "options_url": f"{options_url}?{query}" if query else options_url,
            "loading": service.is_loading(form_id),
        },
    )


async def render_options(
    request: Request,
    service: BaseFormService,
    selected: List[str],
) -> Response:
    """Render the ``<option>`` list of a dialog's multi-select."""
    options, notifications = await service.load_options()
    response = templates.TemplateResponse(
        request=request,
        name="components/options.html",
        context={"options": options, "selected": set(selected)},
    )
    return set_hx_trigger(response, notifications)


def render_field_error(
    request: Request, prefix: str, field: str, message: Optional[str]
) -> Response:
    """Render the inline error slot of one field."""
    return templates.TemplateResponse(
        request=request,
        name="components/field_error.html",
        context={"prefix": prefix, "field": field, "message": message},
    )


def render_result(
    request: Request,
    template: str,
    service: BaseFormService,
    options_url: str,
    form_id: str,
    result: FormResult,
    events: Dict[str, Any],
) -> Response:
    """Render a dialog after a submission attempt.

    A successful submission yields a fresh, empty dialog; otherwise the
    submitted values are kept together with any inline errors.
    """
    if result.succeeded:
        form_id = new_form_id()
        values: Mapping[str, Any] = service.empty_values()
    else:
        values = result.values

    response = render_dialog(
        request,
        template,
        service,
        options_url,
        form_id=form_id,
        values=values,
        errors=result.errors,
    )
    return set_hx_trigger(response, result.notifications, events)
