"""Shared field rules and reference types for the form schemas."""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError

EntityId = Union[int, str]

# Largest accepted magnitude for capacity and age, as a power of ten
MAX_INTEGER_DIGITS = 18


class EntityRef(BaseModel):
    """Identifier-only reference to an existing backend record."""

    id: EntityId


class EntityOption(BaseModel):
    """Read-only record offered in a multi-select.

    Attributes:
        id: Backend identifier.
        name: Label shown in the dropdown.
    """

    id: EntityId
    name: str = ""

    model_config = ConfigDict(extra="allow")

    def to_ref(self) -> EntityRef:
        return EntityRef(id=self.id)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required_text(value: Any, message: str) -> str:
    """Return trimmed text or raise a "required" error."""
    if _is_blank(value):
        raise PydanticCustomError("required", message)
    return str(value).strip()


def positive_integer(value: Any, required_message: str) -> int:
    """Coerce form input to a positive integer.

    Args:
        value: Raw input (string from a form, or a number).
        required_message: Message used when the input is blank.

    Returns:
        The parsed integer.

    Raises:
        PydanticCustomError: If the input is blank, not a number, not an
            integer, not greater than zero or too large to store.
    """
    if _is_blank(value):
        raise PydanticCustomError("required", required_message)
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Needs to be a number")

    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise PydanticCustomError("number_type", "Needs to be a number") from None
    if not number.is_finite():
        raise PydanticCustomError("number_type", "Needs to be a number")
    if number != number.to_integral_value():
        raise PydanticCustomError("integer", "Needs to be integer")
    if number <= 0:
        raise PydanticCustomError("positive", "Needs to be positive")
    if number.adjusted() >= MAX_INTEGER_DIGITS:
        raise PydanticCustomError("number_type", "Needs to be a number")
    return int(number)


def email_address(value: Any, required_message: str = "Email is required") -> str:
    """Validate email format without any DNS lookup."""
    text = required_text(value, required_message)
    try:
        validate_email(text, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email", "Invalid email") from None
    return text


def optional_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def error_messages(exc: ValidationError) -> Dict[str, str]:
    """Map a ValidationError to the first message per top-level field."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        errors.setdefault(field, error["msg"])
    return errors


def to_refs(options: List[EntityOption]) -> List[EntityRef]:
    """Reduce selected records to identifier-only references."""
    return [option.to_ref() for option in options]
