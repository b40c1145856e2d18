"""ORM models."""

from droneflow.api.models.project import Project
from droneflow.api.models.work_order import WorkOrder

__all__ = ["Project", "WorkOrder"]
