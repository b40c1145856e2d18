"""
Lifecycle Service - orchestration around the lifecycle engines.

Fetches the live record, asks the engine what is allowed, and persists
validated transitions together with any status-bound side effect. The
engines stay pure; everything with I/O happens here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

from droneflow.api.exceptions import (
    ConflictError,
    NotFoundError,
    TransitionRejectedError,
    ValidationError,
)
from droneflow.api.repositories import (
    LifecycleRepository,
    ProjectRepository,
    StatusConflictError,
    WorkOrderRepository,
)
from droneflow.domain.lifecycle import (
    PROJECT_UPDATABLE_FIELDS,
    WORK_ORDER_UPDATABLE_FIELDS,
    LifecycleEngine,
    WorkOrderLifecycleEngine,
    project_lifecycle,
    work_order_lifecycle,
)
from droneflow.domain.side_effects import (
    PROJECT_SIDE_EFFECTS,
    WORK_ORDER_SIDE_EFFECTS,
    SetLinkedStatus,
    side_effect_for,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class TransitionOption:
    """One status the record could move to, with its gating result."""
    status: str
    requirements_met: bool
    requirements_message: str
    button_label: str = ""
    description: str = ""


@dataclass
class TransitionOverview:
    """Everything the UI needs to render the lifecycle panel for a record."""
    current_status: Optional[str]
    current_guidance: str
    available_transitions: List[TransitionOption]
    external_tools: Optional[List[Dict[str, str]]] = None


@dataclass
class TransitionOutcome:
    """Result of an applied transition."""
    message: str
    record: Dict[str, Any]
    guidance: str


@dataclass
class FieldUpdateOutcome:
    """Result of a gating-field write, with refreshed transitions."""
    message: str
    record: Dict[str, Any]
    available_transitions: List[TransitionOption] = field(default_factory=list)


# =============================================================================
# SERVICE
# =============================================================================

class LifecycleService:
    """
    Orchestrates one entity kind's lifecycle against its repository.

    Stateless apart from its collaborators; one instance per request.
    """

    def __init__(
        self,
        repository: LifecycleRepository,
        engine: LifecycleEngine,
        side_effects: Mapping[str, SetLinkedStatus],
        updatable_fields: Sequence[str],
        compare_and_swap: bool = True,
    ):
        self.repository = repository
        self.engine = engine
        self.side_effects = side_effects
        self.updatable_fields = tuple(updatable_fields)
        self.compare_and_swap = compare_and_swap

    async def _require(self, record_id: Any):
        instance = await self.repository.get(record_id)
        if instance is None:
            raise NotFoundError(self.engine.entity_name, record_id)
        return instance

    def describe_transitions(
        self, record: Mapping[str, Any], detailed: bool = True
    ) -> List[TransitionOption]:
        """Every outgoing edge from the record's status, checked against the record."""
        current = self.engine.current_status(record)
        options = []
        for status in self.engine.available_next_statuses(current):
            result = self.engine.validate_transition(record, status)
            option = TransitionOption(
                status=status,
                requirements_met=result.valid,
                requirements_message=result.message,
            )
            if detailed:
                option.button_label = f"Move to {status}"
                option.description = self.engine.guidance_for(status)
            options.append(option)
        return options

    async def list_transitions(self, record_id: Any) -> TransitionOverview:
        record = (await self._require(record_id)).to_record()
        current = self.engine.current_status(record)
        return TransitionOverview(
            current_status=current,
            current_guidance=self.engine.guidance_for(current),
            available_transitions=self.describe_transitions(record),
        )

    async def apply_transition(self, record_id: Any, next_status: str) -> TransitionOutcome:
        """
        Validate and persist a status change.

        Raises:
            NotFoundError: Record does not exist
            TransitionRejectedError: Engine rejected the transition
            ConflictError: Status changed concurrently (compare-and-swap lost)
        """
        record = (await self._require(record_id)).to_record()
        current = self.engine.current_status(record)

        result = self.engine.validate_transition(record, next_status)
        if not result.valid:
            logger.info(
                f"Rejected {self.engine.entity_name} {record_id} transition "
                f"'{current}' -> '{next_status}': {result.message}"
            )
            raise TransitionRejectedError(result.message, current, next_status)

        effect = side_effect_for(self.side_effects, next_status)
        if effect is not None:
            await effect.apply(self.repository, record_id)
            logger.info(f"{effect.description} for {self.engine.entity_name} {record_id}")

        expected = current if self.compare_and_swap else None
        try:
            updated = await self.repository.update_status(record_id, next_status, expected)
        except StatusConflictError as e:
            raise ConflictError(
                str(e), details={"expected_status": current, "next_status": next_status}
            )

        logger.info(
            f"{self.engine.entity_name.capitalize()} {record_id} moved "
            f"'{current}' -> '{next_status}'"
        )
        return TransitionOutcome(
            message=f"{self.engine.entity_name.capitalize()} status updated to '{next_status}'",
            record=updated.to_record(),
            guidance=self.engine.guidance_for(next_status),
        )

    def list_statuses(self) -> List[Dict[str, str]]:
        return [
            {"status": status, "guidance": self.engine.guidance_for(status)}
            for status in self.engine.all_statuses()
        ]

    async def update_gating_field(
        self, record_id: Any, field_name: str, value: Any
    ) -> FieldUpdateOutcome:
        """
        Write one allow-listed gating field and re-check transitions.

        Raises:
            ValidationError: Field not allow-listed, or value not coercible
            NotFoundError: Record does not exist
        """
        if field_name not in self.updatable_fields:
            logger.warning(
                f"Refused update of field '{field_name}' on {self.engine.entity_name} {record_id}"
            )
            raise ValidationError(f"Field '{field_name}' cannot be updated through this endpoint")

        await self._require(record_id)
        column = self.engine.fields.column_for(field_name)
        try:
            updated = await self.repository.update_fields(record_id, {column: value})
        except ValueError as e:
            raise ValidationError(str(e), details={"field": field_name})

        record = updated.to_record()
        return FieldUpdateOutcome(
            message=f"Field '{field_name}' updated successfully",
            record=record,
            available_transitions=self.describe_transitions(record, detailed=False),
        )


class ProjectLifecycleService(LifecycleService):
    def __init__(self, repository: ProjectRepository, compare_and_swap: bool = True):
        super().__init__(
            repository=repository,
            engine=project_lifecycle,
            side_effects=PROJECT_SIDE_EFFECTS,
            updatable_fields=PROJECT_UPDATABLE_FIELDS,
            compare_and_swap=compare_and_swap,
        )


class WorkOrderLifecycleService(LifecycleService):
    """Work order lifecycle, plus external tools and quote/invoice blocks."""

    engine: WorkOrderLifecycleEngine
    repository: WorkOrderRepository

    def __init__(self, repository: WorkOrderRepository, compare_and_swap: bool = True):
        super().__init__(
            repository=repository,
            engine=work_order_lifecycle,
            side_effects=WORK_ORDER_SIDE_EFFECTS,
            updatable_fields=WORK_ORDER_UPDATABLE_FIELDS,
            compare_and_swap=compare_and_swap,
        )

    async def list_transitions(self, record_id: Any) -> TransitionOverview:
        overview = await super().list_transitions(record_id)
        overview.external_tools = [
            tool.to_dict() for tool in self.engine.external_tools_for(overview.current_status)
        ]
        return overview

    async def update_quote(self, record_id: Any, **quote: Any) -> Dict[str, Any]:
        """Write amount / pdf_path / status of the quote block."""
        await self._require(record_id)
        try:
            updated = await self.repository.update_quote(record_id, **quote)
        except ValueError as e:
            raise ValidationError(str(e))
        logger.info(f"Updated quote for work order {record_id}")
        return updated.to_record()

    async def update_invoice(self, record_id: Any, **invoice: Any) -> Dict[str, Any]:
        """Write amount / pdf_path / status of the invoice block."""
        await self._require(record_id)
        try:
            updated = await self.repository.update_invoice(record_id, **invoice)
        except ValueError as e:
            raise ValidationError(str(e))
        logger.info(f"Updated invoice for work order {record_id}")
        return updated.to_record()
