"""Tests for status-bound side effects."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from droneflow.domain.side_effects import (
    PROJECT_SIDE_EFFECTS,
    WORK_ORDER_SIDE_EFFECTS,
    SetLinkedStatus,
    side_effect_for,
)


class TestSideEffectTable:

    def test_client_approved_accepts_quote(self):
        effect = side_effect_for(WORK_ORDER_SIDE_EFFECTS, "Client Approved")
        assert effect.column == "quotestatuswo"
        assert effect.value == "Accepted"

    def test_client_rejected_rejects_quote(self):
        effect = side_effect_for(WORK_ORDER_SIDE_EFFECTS, "Client Rejected")
        assert effect.column == "quotestatuswo"
        assert effect.value == "Rejected"

    def test_paid_marks_invoice_paid(self):
        effect = side_effect_for(WORK_ORDER_SIDE_EFFECTS, "Paid")
        assert effect.column == "invoicestatuswo"
        assert effect.value == "Paid"

    @pytest.mark.parametrize("status", ["Scheduled", "Quote Sent", "Completed", "Nope"])
    def test_other_statuses_have_no_effect(self, status):
        assert side_effect_for(WORK_ORDER_SIDE_EFFECTS, status) is None

    def test_projects_have_no_effects(self):
        assert len(PROJECT_SIDE_EFFECTS) == 0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            WORK_ORDER_SIDE_EFFECTS["Scheduled"] = None


class TestSetLinkedStatus:

    @pytest.mark.asyncio
    async def test_apply_writes_single_column(self):
        writer = MagicMock()
        writer.update_fields = AsyncMock()
        effect = SetLinkedStatus(column="quotestatuswo", value="Accepted", description="x")

        await effect.apply(writer, 42)

        writer.update_fields.assert_awaited_once_with(42, {"quotestatuswo": "Accepted"})
