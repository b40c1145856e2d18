"""Repositories for lifecycle-tracked records."""

from droneflow.api.repositories.base import LifecycleRepository, StatusConflictError
from droneflow.api.repositories.project_repository import ProjectRepository
from droneflow.api.repositories.work_order_repository import WorkOrderRepository

__all__ = [
    "LifecycleRepository",
    "StatusConflictError",
    "ProjectRepository",
    "WorkOrderRepository",
]
