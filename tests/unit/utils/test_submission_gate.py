"""Unit tests for SubmissionGate."""

import pytest

from app.exceptions import SubmissionInProgressError
from app.utils.submission_gate import SubmissionGate


class TestSubmissionGate:
    """Tests for the per-dialog loading flag."""

    @pytest.mark.asyncio
    async def test_busy_only_while_held(self, gate: SubmissionGate):
        assert gate.is_busy("form-1") is False

        async with gate.hold("form-1"):
            assert gate.is_busy("form-1") is True
            assert gate.is_busy("form-2") is False

        assert gate.is_busy("form-1") is False

    @pytest.mark.asyncio
    async def test_reentrant_hold_is_refused(self, gate: SubmissionGate):
        async with gate.hold("form-1"):
            with pytest.raises(SubmissionInProgressError) as exc_info:
                async with gate.hold("form-1"):
                    pass

        assert exc_info.value.form_id == "form-1"

    @pytest.mark.asyncio
    async def test_released_when_block_raises(self, gate: SubmissionGate):
        with pytest.raises(RuntimeError):
            async with gate.hold("form-1"):
                raise RuntimeError("boom")

        assert gate.is_busy("form-1") is False

    @pytest.mark.asyncio
    async def test_refused_hold_keeps_first_holder(self, gate: SubmissionGate):
        async with gate.hold("form-1"):
            with pytest.raises(SubmissionInProgressError):
                async with gate.hold("form-1"):
                    pass
            assert gate.is_busy("form-1") is True
