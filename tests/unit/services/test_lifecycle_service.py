"""
Tests for LifecycleService orchestration.

Rejection and not-found paths run against a mocked repository; persistence,
side effects and compare-and-swap run against a real SQLite session.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from droneflow.api.exceptions import (
    ConflictError,
    NotFoundError,
    TransitionRejectedError,
    ValidationError,
)
from droneflow.api.repositories import ProjectRepository, WorkOrderRepository
from droneflow.api.services.lifecycle_service import (
    ProjectLifecycleService,
    WorkOrderLifecycleService,
)


# =============================================================================
# FIXTURES
# =============================================================================

def make_instance(record):
    instance = MagicMock()
    instance.to_record.return_value = record
    return instance


@pytest.fixture
def mock_repository():
    repository = MagicMock()
    repository.get = AsyncMock(return_value=None)
    repository.update_fields = AsyncMock()
    repository.update_status = AsyncMock()
    return repository


@pytest.fixture
def projects(db_session):
    return ProjectRepository(db_session)


@pytest.fixture
def work_orders(db_session):
    return WorkOrderRepository(db_session)


@pytest.fixture
def project_service(projects):
    return ProjectLifecycleService(projects)


@pytest.fixture
def work_order_service(work_orders):
    return WorkOrderLifecycleService(work_orders)


# =============================================================================
# MOCKED REPOSITORY
# =============================================================================

class TestRejections:

    @pytest.mark.asyncio
    async def test_missing_record(self, mock_repository):
        service = ProjectLifecycleService(mock_repository)
        with pytest.raises(NotFoundError) as exc_info:
            await service.apply_transition("PRJ-missing", "Discovery/Meeting")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Project 'PRJ-missing' not found"

    @pytest.mark.asyncio
    async def test_engine_message_is_passed_through(self, mock_repository):
        mock_repository.get.return_value = make_instance(
            {"projectstatus": "Discovery/Meeting", "meetingnotes": ""}
        )
        service = ProjectLifecycleService(mock_repository)

        with pytest.raises(TransitionRejectedError) as exc_info:
            await service.apply_transition("PRJ-1", "Proposal/Contract Drafting")

        assert exc_info.value.message == (
            "Meeting notes are required to proceed to Proposal/Contract Drafting phase."
        )
        assert exc_info.value.details == {
            "current_status": "Discovery/Meeting",
            "next_status": "Proposal/Contract Drafting",
        }
        mock_repository.update_status.assert_not_awaited()
        mock_repository.update_fields.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_side_effect_status_writes_nothing(self, mock_repository):
        mock_repository.get.return_value = make_instance({"workorderstatus": "Planning"})
        service = WorkOrderLifecycleService(mock_repository)

        with pytest.raises(TransitionRejectedError):
            await service.apply_transition(7, "Client Approved")

        mock_repository.update_fields.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_field_outside_allow_list(self, mock_repository):
        service = ProjectLifecycleService(mock_repository)
        with pytest.raises(ValidationError) as exc_info:
            await service.update_gating_field("PRJ-1", "projectStatus", "Completed")
        assert exc_info.value.message == "Field 'projectStatus' cannot be updated through this endpoint"
        mock_repository.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_compare_and_swap_can_be_disabled(self, mock_repository):
        mock_repository.get.return_value = make_instance({"projectstatus": "Planning"})
        mock_repository.update_status.return_value = make_instance({"projectstatus": "On Hold"})
        service = ProjectLifecycleService(mock_repository, compare_and_swap=False)

        await service.apply_transition("PRJ-1", "On Hold")

        mock_repository.update_status.assert_awaited_once_with("PRJ-1", "On Hold", None)


class TestDescribeTransitions:

    def test_detailed_options(self, mock_repository):
        service = ProjectLifecycleService(mock_repository)
        options = service.describe_transitions({"projectstatus": "Planning", "projectname": "A"})

        assert [o.status for o in options] == ["Discovery/Meeting", "Cancelled", "On Hold", "Lost"]
        discovery = options[0]
        assert discovery.requirements_met is False
        assert discovery.button_label == "Move to Discovery/Meeting"
        assert discovery.description.startswith("Schedule and conduct initial client meetings")
        assert options[1].requirements_met is True
        assert options[1].requirements_message == ""

    def test_brief_options(self, mock_repository):
        service = ProjectLifecycleService(mock_repository)
        options = service.describe_transitions({"projectstatus": "Planning"}, detailed=False)
        assert options[0].button_label == ""
        assert options[0].description == ""

    def test_terminal_status_has_no_options(self, mock_repository):
        service = WorkOrderLifecycleService(mock_repository)
        assert service.describe_transitions({"workorderstatus": "Completed"}) == []

    def test_list_statuses(self, mock_repository):
        statuses = WorkOrderLifecycleService(mock_repository).list_statuses()
        assert len(statuses) == 19
        assert statuses[0]["status"] == "Planning"
        assert statuses[-1]["status"] == "Cancelled"


# =============================================================================
# REAL SESSION
# =============================================================================

class TestProjectTransitions:

    @pytest.mark.asyncio
    async def test_list_transitions(self, projects, project_service):
        project = await projects.create("North Ridge", client_name="Ridge Mining")

        overview = await project_service.list_transitions(project.project_id)

        assert overview.current_status == "Planning"
        assert overview.current_guidance.startswith("Initial project planning stage")
        assert overview.available_transitions[0].requirements_met is True
        assert overview.external_tools is None

    @pytest.mark.asyncio
    async def test_apply_transition_persists(self, projects, project_service):
        project = await projects.create("North Ridge", client_name="Ridge Mining")

        outcome = await project_service.apply_transition(project.project_id, "Discovery/Meeting")

        assert outcome.message == "Project status updated to 'Discovery/Meeting'"
        assert outcome.record["projectstatus"] == "Discovery/Meeting"
        assert outcome.guidance.startswith("Schedule and conduct")
        stored = await projects.get(project.project_id)
        assert stored.project_status == "Discovery/Meeting"

    @pytest.mark.asyncio
    async def test_gating_field_unblocks_transition(self, projects, project_service):
        project = await projects.create("North Ridge", client_name="Ridge Mining")
        await project_service.apply_transition(project.project_id, "Discovery/Meeting")

        outcome = await project_service.update_gating_field(
            project.project_id, "meetingNotes", "Client wants orthomosaics"
        )

        assert outcome.message == "Field 'meetingNotes' updated successfully"
        assert outcome.record["meetingnotes"] == "Client wants orthomosaics"
        drafting = outcome.available_transitions[0]
        assert drafting.status == "Proposal/Contract Drafting"
        assert drafting.requirements_met is True

    @pytest.mark.asyncio
    async def test_gating_field_missing_record(self, project_service):
        with pytest.raises(NotFoundError):
            await project_service.update_gating_field("PRJ-none", "meetingNotes", "x")


class TestCompareAndSwap:

    @pytest.mark.asyncio
    async def test_stale_expected_status_conflicts(self, projects):
        project = await projects.create("North Ridge", client_name="Ridge Mining")
        await projects.update_status(project.project_id, "On Hold")

        with pytest.raises(ValueError):
            await projects.update_status(project.project_id, "Cancelled", "Planning")

        stored = await projects.get(project.project_id)
        assert stored.project_status == "On Hold"

    @pytest.mark.asyncio
    async def test_service_maps_lost_race_to_conflict(self, mock_repository):
        from droneflow.api.repositories import StatusConflictError

        mock_repository.get.return_value = make_instance({"projectstatus": "Planning"})
        mock_repository.update_status.side_effect = StatusConflictError("PRJ-1", "Planning")
        service = ProjectLifecycleService(mock_repository)

        with pytest.raises(ConflictError) as exc_info:
            await service.apply_transition("PRJ-1", "On Hold")
        assert exc_info.value.status_code == 409


class TestWorkOrderTransitions:

    async def _work_order(self, projects, work_orders, **fields):
        project = await projects.create("North Ridge", client_name="Ridge Mining")
        work_order = await work_orders.create(project.project_id, "Initial Mapping")
        if fields:
            await work_orders.update_fields(work_order.work_order_id, fields)
        return work_order.work_order_id

    @pytest.mark.asyncio
    async def test_external_tools_for_quoting(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(projects, work_orders, workorderstatus="Quoting")

        overview = await work_order_service.list_transitions(wo_id)

        assert overview.external_tools == [{
            "name": "QuickBooks",
            "description": "Create quote in QuickBooks",
            "url": "https://quickbooks.intuit.com",
        }]

    @pytest.mark.asyncio
    async def test_client_approval_accepts_quote(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(projects, work_orders, workorderstatus="Quote Sent")

        outcome = await work_order_service.apply_transition(wo_id, "Client Approved")

        assert outcome.message == "Work order status updated to 'Client Approved'"
        assert outcome.record["workorderstatus"] == "Client Approved"
        assert outcome.record["quotestatuswo"] == "Accepted"

    @pytest.mark.asyncio
    async def test_payment_marks_invoice_paid(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(
            projects, work_orders, workorderstatus="Payment Pending", quotestatuswo="Accepted"
        )

        outcome = await work_order_service.apply_transition(wo_id, "Paid")

        assert outcome.record["invoicestatuswo"] == "Paid"
        assert outcome.record["quotestatuswo"] == "Accepted"

    @pytest.mark.asyncio
    async def test_scheduled_date_is_coerced(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(projects, work_orders, workorderstatus="Client Approved")

        outcome = await work_order_service.update_gating_field(wo_id, "scheduledDate", "2026-04-02")

        assert outcome.record["scheduleddate"] == "2026-04-02"
        assert [o.status for o in outcome.available_transitions if o.requirements_met] == [
            "Scheduled", "On Hold", "Cancelled",
        ]

    @pytest.mark.asyncio
    async def test_bad_amount_is_a_validation_error(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(projects, work_orders)
        with pytest.raises(ValidationError):
            await work_order_service.update_gating_field(wo_id, "quoteAmountWO", "lots")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "12345678901"])
    async def test_unstorable_amount_is_a_validation_error(
        self, projects, work_orders, work_order_service, amount
    ):
        wo_id = await self._work_order(projects, work_orders)
        with pytest.raises(ValidationError):
            await work_order_service.update_gating_field(wo_id, "invoiceAmountWO", amount)
        stored = await work_orders.get(wo_id)
        assert stored.invoice_amount is None

    @pytest.mark.asyncio
    async def test_non_text_path_is_a_validation_error(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(projects, work_orders)
        with pytest.raises(ValidationError):
            await work_order_service.update_gating_field(wo_id, "quotePDF_Path_WO", ["a.pdf"])

    @pytest.mark.asyncio
    async def test_update_quote_keeps_unset_values(self, projects, work_orders, work_order_service):
        wo_id = await self._work_order(projects, work_orders, quotepdf_path_wo="quotes/q1.pdf")

        record = await work_order_service.update_quote(wo_id, amount=Decimal("1500.50"))

        assert Decimal(record["quoteamountwo"]) == Decimal("1500.50")
        assert record["quotepdf_path_wo"] == "quotes/q1.pdf"

    @pytest.mark.asyncio
    async def test_update_invoice_missing_record(self, work_order_service):
        with pytest.raises(NotFoundError):
            await work_order_service.update_invoice(999, status="Sent")
