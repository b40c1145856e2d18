"""
Lifecycle engine shared by Projects and Work Orders.

A lifecycle is three read-only tables (status graph, transition
requirements, guidance text) plus a field registry describing how gating
fields are read off a persisted record. The engine composes them into the
operations the orchestration layer needs.

Pure module - no dependencies on DB, HTTP, or side-effect handlers.
Every failure path is a TransitionResult, never an exception.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple


NO_GUIDANCE = "No guidance available for this status."


# =============================================================================
# STATUS GRAPH
# =============================================================================

class StatusGraph:
    """
    Immutable directed graph: status -> ordered tuple of next statuses.

    Edge order is display/offer order. Terminal statuses are keys with an
    empty edge tuple.
    """

    def __init__(self, edges: Mapping[str, Sequence[str]]):
        frozen: Dict[str, Tuple[str, ...]] = {}
        for source, targets in edges.items():
            targets = tuple(targets)
            if source in targets:
                raise ValueError(f"Self-loop configured on status '{source}'")
            if len(set(targets)) != len(targets):
                raise ValueError(f"Duplicate edge configured from status '{source}'")
            frozen[source] = targets

        for source, targets in frozen.items():
            for target in targets:
                if target not in frozen:
                    raise ValueError(
                        f"Status '{target}' is reachable from '{source}' "
                        f"but has no entry in the graph"
                    )

        self._edges = MappingProxyType(frozen)

    def next_statuses(self, status: str) -> Tuple[str, ...]:
        return self._edges.get(status, ())

    def statuses(self) -> Tuple[str, ...]:
        return tuple(self._edges.keys())

    def is_terminal(self, status: str) -> bool:
        return status in self._edges and not self._edges[status]

    def __contains__(self, status: object) -> bool:
        return status in self._edges


# =============================================================================
# REQUIREMENTS AND FIELD ACCESS
# =============================================================================

@dataclass(frozen=True)
class TransitionRequirement:
    """Gating fields for one (from, to) transition, checked in order."""
    required_fields: Tuple[str, ...] = ()
    message: str = ""


NO_REQUIREMENTS = TransitionRequirement()


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of validate_transition."""
    valid: bool
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "message": self.message}


@dataclass(frozen=True)
class FieldRegistry:
    """
    Maps logical (camelCase) field names to persisted record keys.

    The persistence layer returns lowercase keys, so any field without an
    explicit mapping falls back to its lowercased name.
    """
    status_key: str
    columns: Mapping[str, str] = field(default_factory=dict)

    def column_for(self, logical_name: str) -> str:
        return self.columns.get(logical_name, logical_name.lower())

    def get_field(self, record: Any, logical_name: str) -> Optional[Any]:
        return _read(record, self.column_for(logical_name))

    def get_status(self, record: Any) -> Optional[str]:
        return _read(record, self.status_key)


def _read(record: Any, key: str) -> Optional[Any]:
    """Read key off a mapping or attribute object, case-insensitively."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        if key in record:
            return record[key]
        lowered = key.lower()
        for candidate, value in record.items():
            if isinstance(candidate, str) and candidate.lower() == lowered:
                return value
        return None
    return getattr(record, key, getattr(record, key.lower(), None))


def is_present(value: Any) -> bool:
    """
    Presence check for gating fields.

    None is missing, blank text is missing, empty collections are missing.
    Anything else (including 0 and False) counts as provided.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) > 0
    return True


# =============================================================================
# ENGINE
# =============================================================================

class LifecycleEngine:
    """
    Status workflow for one entity kind.

    Stateless after construction; safe to share across requests and threads.
    """

    def __init__(
        self,
        entity_name: str,
        graph: StatusGraph,
        requirements: Mapping[Tuple[str, str], TransitionRequirement],
        guidance: Mapping[str, str],
        fields: FieldRegistry,
        statuses: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            entity_name: Human label used in logs ("project", "work order")
            graph: Allowed transitions
            requirements: (from, to) -> gating fields and message
            guidance: status -> operator guidance text
            fields: How to read status and gating fields off a record
            statuses: Declared status order; defaults to graph key order
        """
        self.entity_name = entity_name
        self.graph = graph
        self.requirements = MappingProxyType(dict(requirements))
        self.guidance = MappingProxyType(dict(guidance))
        self.fields = fields
        self._statuses = tuple(statuses) if statuses is not None else graph.statuses()

    def all_statuses(self) -> Tuple[str, ...]:
        """Every status in declared order."""
        return self._statuses

    def available_next_statuses(self, current_status: str) -> List[str]:
        """Edges out of current_status; unknown statuses have none."""
        return list(self.graph.next_statuses(current_status))

    def is_valid_transition(self, current_status: str, next_status: str) -> bool:
        return next_status in self.graph.next_statuses(current_status)

    def transition_requirements(
        self, current_status: str, next_status: str
    ) -> TransitionRequirement:
        return self.requirements.get((current_status, next_status), NO_REQUIREMENTS)

    def current_status(self, record: Any) -> Optional[str]:
        return self.fields.get_status(record)

    def validate_transition(self, record: Any, next_status: str) -> TransitionResult:
        """
        Check a record snapshot against a target status.

        Stops at the first missing gating field in declared order.

        Args:
            record: Lowercase-keyed record snapshot (mapping or object)
            next_status: Target status

        Returns:
            TransitionResult with valid flag and operator-facing message
        """
        current = self.current_status(record)

        if not self.is_valid_transition(current, next_status):
            return TransitionResult(
                valid=False,
                message=f"Cannot transition from '{current}' to '{next_status}'",
            )

        requirement = self.transition_requirements(current, next_status)
        for field_name in requirement.required_fields:
            if not is_present(self.fields.get_field(record, field_name)):
                return TransitionResult(
                    valid=False,
                    message=requirement.message
                    or f"Field '{field_name}' is required for this transition",
                )

        return TransitionResult(valid=True, message="")

    def guidance_for(self, status: str) -> str:
        return self.guidance.get(status, NO_GUIDANCE)
