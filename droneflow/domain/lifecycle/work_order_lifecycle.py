"""
Work Order lifecycle.

Planning -> Quoting -> Quote Sent -> Client Approved -> Scheduled
  -> Fieldwork In Progress -> Fieldwork Complete -> Data Processing
  -> Internal QA/Review -> Ready for Delivery -> Data Delivered
  -> Invoicing -> Invoice Sent -> Payment Pending -> Paid -> Completed

Client Rejected loops back to Quoting (or Cancelled). On Hold can return to
any working status. Completed and Cancelled are terminal.
"""

from dataclasses import dataclass
from typing import Dict, List

from droneflow.domain.lifecycle.engine import (
    FieldRegistry,
    LifecycleEngine,
    StatusGraph,
    TransitionRequirement,
)


class WorkOrderStatus:
    """Work order status values, in declared order."""
    PLANNING = "Planning"
    QUOTING = "Quoting"
    QUOTE_SENT = "Quote Sent"
    CLIENT_APPROVED = "Client Approved"
    CLIENT_REJECTED = "Client Rejected"
    SCHEDULED = "Scheduled"
    FIELDWORK_IN_PROGRESS = "Fieldwork In Progress"
    FIELDWORK_COMPLETE = "Fieldwork Complete"
    DATA_PROCESSING = "Data Processing"
    INTERNAL_QA_REVIEW = "Internal QA/Review"
    READY_FOR_DELIVERY = "Ready for Delivery"
    DATA_DELIVERED = "Data Delivered"
    INVOICING = "Invoicing"
    INVOICE_SENT = "Invoice Sent"
    PAYMENT_PENDING = "Payment Pending"
    PAID = "Paid"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"

    ALL = [
        PLANNING, QUOTING, QUOTE_SENT, CLIENT_APPROVED, CLIENT_REJECTED,
        SCHEDULED, FIELDWORK_IN_PROGRESS, FIELDWORK_COMPLETE, DATA_PROCESSING,
        INTERNAL_QA_REVIEW, READY_FOR_DELIVERY, DATA_DELIVERED, INVOICING,
        INVOICE_SENT, PAYMENT_PENDING, PAID, COMPLETED, ON_HOLD, CANCELLED,
    ]

    INITIAL = PLANNING


S = WorkOrderStatus

WORK_ORDER_TRANSITIONS = {
    S.PLANNING: [S.QUOTING, S.ON_HOLD, S.CANCELLED],
    S.QUOTING: [S.QUOTE_SENT, S.PLANNING, S.ON_HOLD, S.CANCELLED],
    S.QUOTE_SENT: [S.CLIENT_APPROVED, S.CLIENT_REJECTED, S.QUOTING, S.ON_HOLD, S.CANCELLED],
    S.CLIENT_REJECTED: [S.QUOTING, S.CANCELLED],
    S.CLIENT_APPROVED: [S.SCHEDULED, S.ON_HOLD, S.CANCELLED],
    S.SCHEDULED: [S.FIELDWORK_IN_PROGRESS, S.ON_HOLD, S.CANCELLED],
    S.FIELDWORK_IN_PROGRESS: [S.FIELDWORK_COMPLETE, S.ON_HOLD, S.CANCELLED],
    S.FIELDWORK_COMPLETE: [S.DATA_PROCESSING, S.ON_HOLD, S.CANCELLED],
    S.DATA_PROCESSING: [S.INTERNAL_QA_REVIEW, S.ON_HOLD, S.CANCELLED],
    S.INTERNAL_QA_REVIEW: [S.READY_FOR_DELIVERY, S.DATA_PROCESSING, S.ON_HOLD, S.CANCELLED],
    S.READY_FOR_DELIVERY: [S.DATA_DELIVERED, S.ON_HOLD, S.CANCELLED],
    S.DATA_DELIVERED: [S.INVOICING, S.ON_HOLD, S.CANCELLED],
    S.INVOICING: [S.INVOICE_SENT, S.ON_HOLD, S.CANCELLED],
    S.INVOICE_SENT: [S.PAYMENT_PENDING, S.ON_HOLD, S.CANCELLED],
    S.PAYMENT_PENDING: [S.PAID, S.ON_HOLD, S.CANCELLED],
    S.PAID: [S.COMPLETED],
    S.COMPLETED: [],  # Terminal state
    S.ON_HOLD: [
        S.PLANNING, S.QUOTING, S.QUOTE_SENT, S.CLIENT_APPROVED, S.SCHEDULED,
        S.FIELDWORK_IN_PROGRESS, S.FIELDWORK_COMPLETE, S.DATA_PROCESSING,
        S.INTERNAL_QA_REVIEW, S.READY_FOR_DELIVERY, S.DATA_DELIVERED,
        S.INVOICING, S.INVOICE_SENT, S.PAYMENT_PENDING, S.CANCELLED,
    ],
    S.CANCELLED: [],  # Terminal state
}

WORK_ORDER_REQUIREMENTS = {
    (S.PLANNING, S.QUOTING): TransitionRequirement(
        required_fields=("servicesRequestedWO", "operationalKML_WO_Path"),
        message=(
            "Services requested and operational KML file must be provided to proceed "
            "to Quoting phase."
        ),
    ),
    (S.QUOTING, S.QUOTE_SENT): TransitionRequirement(
        required_fields=("quoteAmountWO", "quotePDF_Path_WO"),
        message=(
            "Quote amount and quote PDF document must be provided to proceed to "
            "Quote Sent phase."
        ),
    ),
    (S.CLIENT_APPROVED, S.SCHEDULED): TransitionRequirement(
        required_fields=("scheduledDate",),
        message="Scheduled date must be provided to proceed to Scheduled phase.",
    ),
    (S.INVOICING, S.INVOICE_SENT): TransitionRequirement(
        required_fields=("invoiceAmountWO", "invoicePDF_Path_WO"),
        message=(
            "Invoice amount and invoice PDF document must be provided to proceed to "
            "Invoice Sent phase."
        ),
    ),
}

WORK_ORDER_GUIDANCE = {
    S.PLANNING: (
        "Define the scope of work, including services needed and operational area. "
        "Outline specific requirements for the drone operation."
    ),
    S.QUOTING: (
        "Calculate costs based on services requested, flight time, equipment, and "
        "personnel. Prepare a quote document to send to the client."
    ),
    S.QUOTE_SENT: (
        "Quote has been sent to the client. Follow up as needed and update status "
        "when client responds."
    ),
    S.CLIENT_REJECTED: (
        "Client has rejected the quote. Consider revising and resubmitting or "
        "cancelling the work order."
    ),
    S.CLIENT_APPROVED: "Client has approved the quote. Proceed with scheduling the fieldwork.",
    S.SCHEDULED: (
        "Work order is scheduled. Prepare equipment, personnel, and confirm weather "
        "conditions for the planned date."
    ),
    S.FIELDWORK_IN_PROGRESS: (
        "Drone operations are currently in progress. Monitor progress and address "
        "any issues that arise."
    ),
    S.FIELDWORK_COMPLETE: (
        "Fieldwork has been completed. Organize raw data and prepare for processing."
    ),
    S.DATA_PROCESSING: (
        "Raw data is being processed. Generate deliverables according to client "
        "requirements."
    ),
    S.INTERNAL_QA_REVIEW: (
        "Reviewing processed data for quality assurance. Ensure all deliverables "
        "meet quality standards."
    ),
    S.READY_FOR_DELIVERY: (
        "Data is ready for delivery to client. Prepare delivery package and "
        "documentation."
    ),
    S.DATA_DELIVERED: "Deliverables have been provided to the client. Prepare for invoicing.",
    S.INVOICING: (
        "Generate an invoice for completed work. Include all relevant details and "
        "payment terms."
    ),
    S.INVOICE_SENT: "Invoice has been sent to client. Monitor for payment.",
    S.PAYMENT_PENDING: "Payment is pending. Follow up with client if payment is delayed.",
    S.PAID: "Payment has been received. Finalize work order documentation.",
    S.COMPLETED: "Work order is complete. No further action required.",
    S.ON_HOLD: (
        "Work order is temporarily on hold. Document the reason and expected "
        "resumption date."
    ),
    S.CANCELLED: "Work order has been cancelled. Document the reason for cancellation.",
}


@dataclass(frozen=True)
class ExternalTool:
    """Third-party application link shown alongside a status."""
    name: str
    description: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description, "url": self.url}


QUICKBOOKS_URL = "https://quickbooks.intuit.com"

WORK_ORDER_EXTERNAL_TOOLS = {
    S.QUOTING: (
        ExternalTool("QuickBooks", "Create quote in QuickBooks", QUICKBOOKS_URL),
    ),
    S.INVOICING: (
        ExternalTool("QuickBooks", "Create invoice in QuickBooks", QUICKBOOKS_URL),
    ),
}

WORK_ORDER_FIELDS = FieldRegistry(
    status_key="workorderstatus",
    columns={
        "servicesRequestedWO": "servicesrequestedwo",
        "operationalKML_WO_Path": "operationalkml_wo_path",
        "quoteAmountWO": "quoteamountwo",
        "quotePDF_Path_WO": "quotepdf_path_wo",
        "scheduledDate": "scheduleddate",
        "invoiceAmountWO": "invoiceamountwo",
        "invoicePDF_Path_WO": "invoicepdf_path_wo",
    },
)

WORK_ORDER_UPDATABLE_FIELDS = (
    "servicesRequestedWO",
    "operationalKML_WO_Path",
    "quoteAmountWO",
    "quotePDF_Path_WO",
    "scheduledDate",
    "invoiceAmountWO",
    "invoicePDF_Path_WO",
)


class WorkOrderLifecycleEngine(LifecycleEngine):
    """Lifecycle engine wired with the work order tables, plus external tools."""

    def __init__(
        self,
        transitions=None,
        requirements=None,
        guidance=None,
        external_tools=None,
    ):
        super().__init__(
            entity_name="work order",
            graph=StatusGraph(
                transitions if transitions is not None else WORK_ORDER_TRANSITIONS
            ),
            requirements=requirements if requirements is not None else WORK_ORDER_REQUIREMENTS,
            guidance=guidance if guidance is not None else WORK_ORDER_GUIDANCE,
            fields=WORK_ORDER_FIELDS,
            statuses=WorkOrderStatus.ALL,
        )
        self._external_tools = dict(
            external_tools if external_tools is not None else WORK_ORDER_EXTERNAL_TOOLS
        )

    def external_tools_for(self, status: str) -> List[ExternalTool]:
        return list(self._external_tools.get(status, ()))


work_order_lifecycle = WorkOrderLifecycleEngine()
