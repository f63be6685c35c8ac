"""Base form service driving validation and submission of a dialog."""

import enum
import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

from pydantic import BaseModel, ValidationError

from app.exceptions import BackendError
from app.schemas.common import EntityOption, error_messages
from app.utils.backend import BackendClient
from app.utils.notifications import Notification
from app.utils.options_cache import OptionsCache
from app.utils.submission_gate import SubmissionGate

logger = logging.getLogger(__name__)

FormT = TypeVar("FormT", bound=BaseModel)

SuccessCallback = Callable[[Any], None]


class FormState(str, enum.Enum):
    """Lifecycle of a single dialog submission."""

    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SETTLED = "settled"


@dataclass
class FormResult:
    """Outcome of a submission attempt.

    Attributes:
        values: Normalized raw values, used to re-render the form.
        errors: Field-level validation messages keyed by field name.
        data: Response body of the backend on success.
        notifications: Transient notifications to show.
        succeeded: Whether the backend accepted the submission.
    """

    values: Dict[str, Any]
    errors: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    notifications: List[Notification] = field(default_factory=list)
    succeeded: bool = False


class BaseFormService(Generic[FormT]):
    """Base service for a create dialog backed by the school REST backend.

    A dialog has one multi-select ("relation") field whose options are
    fetched from ``options_path``; the rest are plain inputs validated by
    ``form_class``. A valid form is converted with ``payload_class.from_form``
    and posted to ``submit_path``.

    Usage:
        class CourseFormService(BaseFormService[CourseForm]):
            form_class = CourseForm
            payload_class = CoursePayload
            options_path = "/api/student"
            submit_path = "/api/course"
            relation_field = "students"
            ...

        service = CourseFormService(backend, options_cache, gate)
        result = await service.submit(raw, form_id, on_success=callback)

    Attributes:
        state: Current FormState of this service instance.
    """

    form_class: type[FormT]
    payload_class: Any
    options_path: str
    submit_path: str
    relation_field: str

    unknown_option_message: str
    options_failure_message: str
    success_message: str
    failure_message: str

    def __init__(
        self,
        backend: BackendClient,
        options_cache: OptionsCache,
        gate: SubmissionGate,
    ) -> None:
        """Initialize service with its collaborators.

        Args:
            backend: Client for the school REST backend.
            options_cache: Shared cache of option lists.
            gate: Shared per-dialog submission flag.
        """
        self.backend = backend
        self.options_cache = options_cache
        self.gate = gate
        self.state = FormState.IDLE

    @property
    def field_names(self) -> List[str]:
        return list(self.form_class.model_fields)

    def is_loading(self, form_id: str) -> bool:
        """Whether a submission of this dialog is in flight."""
        return self.gate.is_busy(form_id)

    def _set_state(self, state: FormState, form_id: Optional[str] = None) -> None:
        logger.debug(
            f"{type(self).__name__}: {self.state.value} -> {state.value}",
            extra={"form_id": form_id},
        )
        self.state = state

    def empty_values(self) -> Dict[str, Any]:
        """Default values of a freshly opened dialog."""
        return {
            name: [] if name == self.relation_field else ""
            for name in self.field_names
        }

    def normalize(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep known fields only and coerce the relation field to a list of ids."""
        values = self.empty_values()
        for name in values:
            if name in raw and raw[name] is not None:
                values[name] = raw[name]

        selected = values[self.relation_field]
        if isinstance(selected, (str, int)):
            selected = [selected]
        values[self.relation_field] = [str(item) for item in selected if item != ""]
        return values

    async def load_options(self) -> Tuple[List[EntityOption], List[Notification]]:
        """Fetch the selectable records for the relation field.

        Returns:
            Tuple of (options, notifications). On backend failure the options
            list is empty and an error notification is returned.
        """
        try:
            records = await self.options_cache.get(
                self.options_path, self.backend.get_json
            )
        except BackendError as e:
            logger.error(
                "Failed to load options",
                extra={"path": self.options_path, "error": str(e)},
            )
            return [], [Notification.error(self.options_failure_message)]

        options: List[EntityOption] = []
        for record in records:
            try:
                options.append(EntityOption.model_validate(record))
            except ValidationError:
                logger.warning(
                    "Skipping malformed option",
                    extra={"path": self.options_path, "record": record},
                )
        return options, []

    async def _resolve_selection(
        self, selected_ids: List[str]
    ) -> Tuple[List[EntityOption], Dict[str, str]]:
        """Turn selected ids back into the option records they refer to."""
        if not selected_ids:
            return [], {}

        options, notifications = await self.load_options()
        if notifications:
            return [], {self.relation_field: self.options_failure_message}

        by_id = {str(option.id): option for option in options}
        resolved = [by_id[item] for item in selected_ids if item in by_id]
        if len(resolved) != len(selected_ids):
            return [], {self.relation_field: self.unknown_option_message}
        return resolved, {}

    async def validate(
        self, raw: Mapping[str, Any]
    ) -> Tuple[Optional[FormT], Dict[str, str]]:
        """Validate a whole dialog.

        Args:
            raw: Submitted values; the relation field holds selected ids.

        Returns:
            Tuple of (form, errors). ``form`` is None when ``errors`` is not
            empty.
        """
        values = self.normalize(raw)
        selected, errors = await self._resolve_selection(values[self.relation_field])
        values[self.relation_field] = selected

        try:
            form = self.form_class.model_validate(values)
        except ValidationError as exc:
            return None, {**error_messages(exc), **errors}

        if errors:
            return None, errors
        return form, {}

    async def validate_field(self, raw: Mapping[str, Any], name: str) -> Optional[str]:
        """Validate one field, as done when an input loses focus.

        Args:
            raw: Current values of the dialog.
            name: Field to check.

        Returns:
            Error message for the field, or None if it is valid or unknown.
        """
        if name not in self.field_names:
            return None

        values = self.normalize(raw)
        if name == self.relation_field:
            _, errors = await self._resolve_selection(values[name])
            return errors.get(name)

        values[self.relation_field] = []
        try:
            self.form_class.model_validate(values)
        except ValidationError as exc:
            return error_messages(exc).get(name)
        return None

    async def submit(
        self,
        raw: Mapping[str, Any],
        form_id: str,
        on_success: Optional[SuccessCallback] = None,
    ) -> FormResult:
        """Validate and post a dialog to the backend.

        Args:
            raw: Submitted values.
            form_id: Identifier of the dialog, used to refuse re-entrant
                submission.
            on_success: Called once with the backend response body when the
                backend accepts the submission.

        Returns:
            FormResult with errors, notifications and response data.

        Raises:
            SubmissionInProgressError: If this dialog is already submitting.
        """
        result = FormResult(values=self.normalize(raw))

        async with self.gate.hold(form_id):
            self._set_state(FormState.VALIDATING, form_id)
            form, errors = await self.validate(raw)
            if form is None:
                result.errors = errors
                self._set_state(FormState.IDLE, form_id)
                return result

            self._set_state(FormState.SUBMITTING, form_id)
            payload = self.payload_class.from_form(form)
            try:
                data = await self.backend.post_json(
                    self.submit_path, payload.model_dump(mode="json")
                )
            except BackendError as e:
                logger.error(
                    "Form submission failed",
                    extra={
                        "path": self.submit_path,
                        "form_id": form_id,
                        "status_code": e.status_code,
                        "error": str(e),
                    },
                )
                result.notifications.append(Notification.error(self.failure_message))
            else:
                result.data = data
                # The created record must show up in the other dialog's options
                self.options_cache.invalidate(self.submit_path)
                try:
                    if on_success is not None:
                        on_success(data)
                except Exception as e:
                    logger.error(
                        "Success callback failed",
                        extra={"form_id": form_id, "error": str(e)},
                        exc_info=True,
                    )
                    result.notifications.append(
                        Notification.error(self.failure_message)
                    )
                else:
                    result.succeeded = True
                    result.notifications.append(
                        Notification.success(self.success_message)
                    )
            finally:
                self._set_state(FormState.SETTLED, form_id)

        self._set_state(FormState.IDLE, form_id)
        return result
