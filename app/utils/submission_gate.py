"""Per-dialog loading flag guarding against re-entrant form submission."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Set

from app.exceptions import SubmissionInProgressError

logger = logging.getLogger(__name__)


class SubmissionGate:
    """Tracks which dialogs currently have a submission in flight.

    A dialog is identified by the ``form_id`` rendered into it. Holding the
    gate does not cancel anything; it only refuses a second submission of
    the same dialog until the first one settles.
    """

    def __init__(self) -> None:
        self._in_flight: Set[str] = set()

    def is_busy(self, form_id: str) -> bool:
        return form_id in self._in_flight

    @asynccontextmanager
    async def hold(self, form_id: str) -> AsyncIterator[None]:
        """Mark a dialog as submitting for the duration of the block.

        Args:
            form_id: Identifier of the dialog being submitted.

        Raises:
            SubmissionInProgressError: If the dialog is already submitting.
        """
        if form_id in self._in_flight:
            logger.warning("Rejected re-entrant submission", extra={"form_id": form_id})
            raise SubmissionInProgressError(form_id)

        self._in_flight.add(form_id)
        try:
            yield
        finally:
            self._in_flight.discard(form_id)


submission_gate = SubmissionGate()


def get_submission_gate() -> SubmissionGate:
    return submission_gate
