"""
Side effects bound to specific target statuses.

A fixed dispatch table (target status -> effect), kept apart from the
lifecycle engines so validation never knows about it. The orchestration
layer looks up the effect after a transition validates and applies it in
the same unit of work as the status write.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Protocol

from droneflow.domain.lifecycle.work_order_lifecycle import WorkOrderStatus


class FieldWriter(Protocol):
    """Anything that can persist column values on a record (a repository)."""

    async def update_fields(self, record_id: Any, values: Mapping[str, Any]) -> Any:
        ...


@dataclass(frozen=True)
class SetLinkedStatus:
    """Write a fixed value to a linked quote/invoice status column."""
    column: str
    value: str
    description: str

    async def apply(self, writer: FieldWriter, record_id: Any) -> None:
        await writer.update_fields(record_id, {self.column: self.value})


class QuoteStatus:
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class InvoiceStatus:
    PAID = "Paid"


WORK_ORDER_SIDE_EFFECTS: Mapping[str, SetLinkedStatus] = MappingProxyType({
    WorkOrderStatus.CLIENT_APPROVED: SetLinkedStatus(
        column="quotestatuswo",
        value=QuoteStatus.ACCEPTED,
        description="Mark quote accepted",
    ),
    WorkOrderStatus.CLIENT_REJECTED: SetLinkedStatus(
        column="quotestatuswo",
        value=QuoteStatus.REJECTED,
        description="Mark quote rejected",
    ),
    WorkOrderStatus.PAID: SetLinkedStatus(
        column="invoicestatuswo",
        value=InvoiceStatus.PAID,
        description="Mark invoice paid",
    ),
})

# Projects have no status-bound side effects
PROJECT_SIDE_EFFECTS: Mapping[str, SetLinkedStatus] = MappingProxyType({})


def side_effect_for(
    table: Mapping[str, SetLinkedStatus], next_status: str
) -> Optional[SetLinkedStatus]:
    return table.get(next_status)
