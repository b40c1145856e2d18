"""Request/response schemas for lifecycle endpoints (camelCase on the wire)."""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys; accepts either form on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# TRANSITIONS
# =============================================================================

class TransitionOptionResponse(CamelModel):
    status: str
    requirements_met: bool
    requirements_message: str
    button_label: str
    description: str


class TransitionCheckResponse(CamelModel):
    """Transition entry returned after a field update (no label/description)."""
    status: str
    requirements_met: bool
    requirements_message: str


class ExternalToolResponse(CamelModel):
    name: str
    description: str
    url: str


class TransitionsResponse(CamelModel):
    current_status: Optional[str]
    current_guidance: str
    available_transitions: List[TransitionOptionResponse]


class WorkOrderTransitionsResponse(TransitionsResponse):
    external_tools: List[ExternalToolResponse] = Field(default_factory=list)


class StatusUpdateRequest(CamelModel):
    next_status: str


class ProjectStatusUpdateResponse(CamelModel):
    success: bool = True
    message: str
    project: Dict[str, Any]
    guidance: str


class WorkOrderStatusUpdateResponse(CamelModel):
    success: bool = True
    message: str
    work_order: Dict[str, Any]
    guidance: str


class StatusGuidanceResponse(CamelModel):
    status: str
    guidance: str


# =============================================================================
# GATING FIELDS
# =============================================================================

class FieldUpdateRequest(CamelModel):
    field: str = Field(..., min_length=1)
    value: Any = None


class ProjectFieldUpdateResponse(CamelModel):
    success: bool = True
    message: str
    project: Dict[str, Any]
    available_transitions: List[TransitionCheckResponse]


class WorkOrderFieldUpdateResponse(CamelModel):
    success: bool = True
    message: str
    work_order: Dict[str, Any]
    available_transitions: List[TransitionCheckResponse]


# =============================================================================
# QUOTE / INVOICE
# =============================================================================

class QuoteUpdateRequest(CamelModel):
    quote_amount_wo: Optional[Decimal] = Field(None, alias="quoteAmountWO", ge=0)
    quote_pdf_path_wo: Optional[str] = Field(None, alias="quotePDF_Path_WO")
    quote_status_wo: Optional[str] = Field(None, alias="quoteStatusWO")


class InvoiceUpdateRequest(CamelModel):
    invoice_amount_wo: Optional[Decimal] = Field(None, alias="invoiceAmountWO", ge=0)
    invoice_pdf_path_wo: Optional[str] = Field(None, alias="invoicePDF_Path_WO")
    invoice_status_wo: Optional[str] = Field(None, alias="invoiceStatusWO")


class WorkOrderRecordResponse(CamelModel):
    success: bool = True
    message: str
    work_order: Dict[str, Any]


# =============================================================================
# RECORDS
# =============================================================================

class ProjectCreateRequest(CamelModel):
    project_name: str = Field(..., min_length=1, max_length=200)
    client_name: Optional[str] = Field(None, max_length=200)
    project_description: Optional[str] = None


class WorkOrderCreateRequest(CamelModel):
    project_id: str = Field(..., min_length=1)
    work_order_name: str = Field(..., min_length=1, max_length=200)
    scheduled_date: Optional[date] = None
    services_requested_wo: Optional[List[str]] = Field(None, alias="servicesRequestedWO")
