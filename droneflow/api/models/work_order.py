"""
Work Order model for DroneFlow.

One unit of drone fieldwork under a project, carrying its own quote and
invoice. Column names are the lowercase keys the lifecycle field registry
reads gating fields by.
"""
from decimal import Decimal

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.sql import func

from droneflow.core.database import Base
from droneflow.domain.lifecycle import WorkOrderStatus


class WorkOrder(Base):
    """Fieldwork order with quote/invoice tracking."""
    __tablename__ = "work_orders"

    work_order_id = Column("workorderid", Integer, primary_key=True, autoincrement=True)
    project_id = Column(
        "projectid", String(16),
        ForeignKey("projects.projectid", ondelete="CASCADE"), nullable=False, index=True,
    )
    work_order_name = Column("workordername", String(200), nullable=False)
    work_order_status = Column(
        "workorderstatus", String(50), nullable=False,
        default=WorkOrderStatus.INITIAL, index=True,
    )

    # Gating fields
    scheduled_date = Column("scheduleddate", Date)
    services_requested = Column("servicesrequestedwo", JSON)
    operational_kml_path = Column("operationalkml_wo_path", String(500))

    # Quote
    quote_amount = Column("quoteamountwo", Numeric(12, 2))
    quote_pdf_path = Column("quotepdf_path_wo", String(500))
    quote_status = Column("quotestatuswo", String(50))

    # Invoice
    invoice_amount = Column("invoiceamountwo", Numeric(12, 2))
    invoice_pdf_path = Column("invoicepdf_path_wo", String(500))
    invoice_status = Column("invoicestatuswo", String(50))

    # Storage folder
    folder_id = Column("workorderfolderid_drive", String(200))
    folder_name = Column("workorderfoldername_drive", String(300))

    created_by = Column("createdby", String(100))
    created_at = Column("createdat", DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        "updatedat", DateTime(timezone=True),
        server_default=func.now(), onupdate=func.now(), nullable=False,
    )

    def __repr__(self):
        return f"<WorkOrder {self.work_order_id}: {self.work_order_name}>"

    def to_record(self):
        """Lowercase-keyed snapshot, as the lifecycle engines read it."""
        record = {}
        for column in self.__table__.columns:
            value = getattr(self, self.__mapper__.get_property_by_column(column).key)
            if isinstance(value, Decimal):
                value = str(value)
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            record[column.name] = value
        return record
