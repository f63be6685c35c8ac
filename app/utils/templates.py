"""Jinja2 template configuration for the application."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def field_dom_id(prefix: str, field: str, part: str = "input") -> str:
    """DOM id of a dialog field element, unique across both dialogs."""
    return f"{prefix}-{part}-{field}"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["field_dom_id"] = field_dom_id
