"""Status workflows for Projects and Work Orders."""

from droneflow.domain.lifecycle.engine import (
    NO_GUIDANCE,
    FieldRegistry,
    LifecycleEngine,
    StatusGraph,
    TransitionRequirement,
    TransitionResult,
    is_present,
)
from droneflow.domain.lifecycle.project_lifecycle import (
    PROJECT_GUIDANCE,
    PROJECT_REQUIREMENTS,
    PROJECT_TRANSITIONS,
    PROJECT_UPDATABLE_FIELDS,
    ProjectLifecycleEngine,
    ProjectStatus,
    project_lifecycle,
)
from droneflow.domain.lifecycle.work_order_lifecycle import (
    WORK_ORDER_EXTERNAL_TOOLS,
    WORK_ORDER_GUIDANCE,
    WORK_ORDER_REQUIREMENTS,
    WORK_ORDER_TRANSITIONS,
    WORK_ORDER_UPDATABLE_FIELDS,
    ExternalTool,
    WorkOrderLifecycleEngine,
    WorkOrderStatus,
    work_order_lifecycle,
)

__all__ = [
    "NO_GUIDANCE",
    "FieldRegistry",
    "LifecycleEngine",
    "StatusGraph",
    "TransitionRequirement",
    "TransitionResult",
    "is_present",
    "PROJECT_GUIDANCE",
    "PROJECT_REQUIREMENTS",
    "PROJECT_TRANSITIONS",
    "PROJECT_UPDATABLE_FIELDS",
    "ProjectLifecycleEngine",
    "ProjectStatus",
    "project_lifecycle",
    "WORK_ORDER_EXTERNAL_TOOLS",
    "WORK_ORDER_GUIDANCE",
    "WORK_ORDER_REQUIREMENTS",
    "WORK_ORDER_TRANSITIONS",
    "WORK_ORDER_UPDATABLE_FIELDS",
    "ExternalTool",
    "WorkOrderLifecycleEngine",
    "WorkOrderStatus",
    "work_order_lifecycle",
]
