"""
Work Order Lifecycle API Endpoints

- GET  /wo-lifecycle/statuses                          - All work order statuses
- GET  /wo-lifecycle/workorder/{work_order_id}/transitions - Transitions + external tools
- POST /wo-lifecycle/workorder/{work_order_id}/status      - Apply a transition
- POST /wo-lifecycle/workorder/{work_order_id}/field       - Update a gating field
- POST /wo-lifecycle/workorder/{work_order_id}/quote       - Update quote block
- POST /wo-lifecycle/workorder/{work_order_id}/invoice     - Update invoice block
"""

from typing import List

from fastapi import APIRouter, Depends

from droneflow.api.dependencies import get_work_order_lifecycle_service
from droneflow.api.schemas.lifecycle import (
    ExternalToolResponse,
    FieldUpdateRequest,
    InvoiceUpdateRequest,
    QuoteUpdateRequest,
    StatusGuidanceResponse,
    StatusUpdateRequest,
    TransitionCheckResponse,
    TransitionOptionResponse,
    WorkOrderFieldUpdateResponse,
    WorkOrderRecordResponse,
    WorkOrderStatusUpdateResponse,
    WorkOrderTransitionsResponse,
)
from droneflow.api.services.lifecycle_service import WorkOrderLifecycleService

router = APIRouter(prefix="/wo-lifecycle", tags=["work-order-lifecycle"])


@router.get(
    "/statuses",
    response_model=List[StatusGuidanceResponse],
    summary="List all work order statuses",
)
async def list_work_order_statuses(
    service: WorkOrderLifecycleService = Depends(get_work_order_lifecycle_service),
) -> List[StatusGuidanceResponse]:
    return [StatusGuidanceResponse(**s) for s in service.list_statuses()]


@router.get(
    "/workorder/{work_order_id}/transitions",
    response_model=WorkOrderTransitionsResponse,
    summary="Get available status transitions for a work order",
)
async def get_work_order_transitions(
    work_order_id: int,
    service: WorkOrderLifecycleService = Depends(get_work_order_lifecycle_service),
) -> WorkOrderTransitionsResponse:
    overview = await service.list_transitions(work_order_id)
    return WorkOrderTransitionsResponse(
        current_status=overview.current_status,
        current_guidance=overview.current_guidance,
        available_transitions=[
            TransitionOptionResponse(**vars(t)) for t in overview.available_transitions
        ],
        external_tools=[ExternalToolResponse(**tool) for tool in overview.external_tools or []],
    )


@router.post(
    "/workorder/{work_order_id}/status",
    response_model=WorkOrderStatusUpdateResponse,
    summary="Move a work order to a new status",
    description="""
    Moving to **Client Approved** or **Client Rejected** also marks the quote
    Accepted/Rejected; moving to **Paid** marks the invoice Paid.
    """,
)
async def update_work_order_status(
    work_order_id: int,
    request: StatusUpdateRequest,
    service: WorkOrderLifecycleService = Depends(get_work_order_lifecycle_service),
) -> WorkOrderStatusUpdateResponse:
    outcome = await service.apply_transition(work_order_id, request.next_status)
    return WorkOrderStatusUpdateResponse(
        message=outcome.message,
        work_order=outcome.record,
        guidance=outcome.guidance,
    )


@router.post(
    "/workorder/{work_order_id}/field",
    response_model=WorkOrderFieldUpdateResponse,
    summary="Update a field required for a status transition",
)
async def update_work_order_transition_field(
    work_order_id: int,
    request: FieldUpdateRequest,
    service: WorkOrderLifecycleService = Depends(get_work_order_lifecycle_service),
) -> WorkOrderFieldUpdateResponse:
    outcome = await service.update_gating_field(work_order_id, request.field, request.value)
    return WorkOrderFieldUpdateResponse(
        message=outcome.message,
        work_order=outcome.record,
        available_transitions=[
            TransitionCheckResponse(
                status=t.status,
                requirements_met=t.requirements_met,
                requirements_message=t.requirements_message,
            )
            for t in outcome.available_transitions
        ],
    )


@router.post(
    "/workorder/{work_order_id}/quote",
    response_model=WorkOrderRecordResponse,
    summary="Update quote information",
)
async def update_quote_info(
    work_order_id: int,
    request: QuoteUpdateRequest,
    service: WorkOrderLifecycleService = Depends(get_work_order_lifecycle_service),
) -> WorkOrderRecordResponse:
    record = await service.update_quote(
        work_order_id,
        amount=request.quote_amount_wo,
        pdf_path=request.quote_pdf_path_wo,
        status=request.quote_status_wo,
    )
    return WorkOrderRecordResponse(
        message="Quote information updated successfully",
        work_order=record,
    )


@router.post(
    "/workorder/{work_order_id}/invoice",
    response_model=WorkOrderRecordResponse,
    summary="Update invoice information",
)
async def update_invoice_info(
    work_order_id: int,
    request: InvoiceUpdateRequest,
    service: WorkOrderLifecycleService = Depends(get_work_order_lifecycle_service),
) -> WorkOrderRecordResponse:
    record = await service.update_invoice(
        work_order_id,
        amount=request.invoice_amount_wo,
        pdf_path=request.invoice_pdf_path_wo,
        status=request.invoice_status_wo,
    )
    return WorkOrderRecordResponse(
        message="Invoice information updated successfully",
        work_order=record,
    )
