"""
Work Order Repository for DroneFlow.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select

from droneflow.api.models import WorkOrder
from droneflow.api.repositories.base import (
    LifecycleRepository,
    to_date,
    to_decimal,
    to_string_list,
    to_text,
)
from droneflow.domain.lifecycle import WorkOrderStatus

logger = logging.getLogger(__name__)


class WorkOrderRepository(LifecycleRepository):
    """Repository for work order records, including quote and invoice blocks."""

    model = WorkOrder
    status_column = "workorderstatus"
    coercers = {
        "scheduleddate": to_date,
        "servicesrequestedwo": to_string_list,
        "quoteamountwo": to_decimal,
        "invoiceamountwo": to_decimal,
        "operationalkml_wo_path": to_text,
        "quotepdf_path_wo": to_text,
        "invoicepdf_path_wo": to_text,
    }

    async def create(
        self,
        project_id: str,
        work_order_name: str,
        scheduled_date: Optional[date] = None,
        services_requested: Optional[List[str]] = None,
        created_by: Optional[str] = None,
    ) -> WorkOrder:
        """
        Create a new work order in the initial lifecycle status.

        The caller is responsible for checking that the project exists.
        """
        work_order = WorkOrder(
            project_id=project_id,
            work_order_name=work_order_name,
            work_order_status=WorkOrderStatus.INITIAL,
            scheduled_date=scheduled_date,
            services_requested=services_requested,
            created_by=created_by,
        )
        self.db.add(work_order)
        await self.db.flush()
        await self.db.refresh(work_order)

        logger.info(
            f"Created work order: {work_order.work_order_id} - {work_order_name} "
            f"(project {project_id})"
        )
        return work_order

    async def list_for_project(self, project_id: str) -> List[WorkOrder]:
        query = (
            select(WorkOrder)
            .where(WorkOrder.project_id == project_id)
            .order_by(WorkOrder.scheduled_date.desc(), WorkOrder.created_at.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_quote(
        self,
        work_order_id: int,
        amount: Optional[Decimal] = None,
        pdf_path: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Optional[WorkOrder]:
        """Write the quote block; fields left as None are unchanged."""
        values = {
            "quoteamountwo": amount,
            "quotepdf_path_wo": pdf_path,
            "quotestatuswo": status,
        }
        return await self.update_fields(
            work_order_id, {k: v for k, v in values.items() if v is not None}
        )

    async def update_invoice(
        self,
        work_order_id: int,
        amount: Optional[Decimal] = None,
        pdf_path: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Optional[WorkOrder]:
        """Write the invoice block; fields left as None are unchanged."""
        values = {
            "invoiceamountwo": amount,
            "invoicepdf_path_wo": pdf_path,
            "invoicestatuswo": status,
        }
        return await self.update_fields(
            work_order_id, {k: v for k, v in values.items() if v is not None}
        )
