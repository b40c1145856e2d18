"""FastAPI dependency injection for API endpoints."""

from pathlib import Path
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from droneflow.api.repositories import ProjectRepository, WorkOrderRepository
from droneflow.api.services.folder_automation_service import (
    FolderAutomationService,
    LocalFolderProvider,
)
from droneflow.api.services.lifecycle_service import (
    ProjectLifecycleService,
    WorkOrderLifecycleService,
)
from droneflow.core.database import get_db
from droneflow.settings import Settings, get_settings


def get_project_repository(db: AsyncSession = Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


def get_work_order_repository(db: AsyncSession = Depends(get_db)) -> WorkOrderRepository:
    return WorkOrderRepository(db)


def get_project_lifecycle_service(
    repository: ProjectRepository = Depends(get_project_repository),
    settings: Settings = Depends(get_settings),
) -> ProjectLifecycleService:
    return ProjectLifecycleService(repository, compare_and_swap=settings.status_compare_and_swap)


def get_work_order_lifecycle_service(
    repository: WorkOrderRepository = Depends(get_work_order_repository),
    settings: Settings = Depends(get_settings),
) -> WorkOrderLifecycleService:
    return WorkOrderLifecycleService(repository, compare_and_swap=settings.status_compare_and_swap)


def get_folder_automation(
    projects: ProjectRepository = Depends(get_project_repository),
    work_orders: WorkOrderRepository = Depends(get_work_order_repository),
    settings: Settings = Depends(get_settings),
) -> Optional[FolderAutomationService]:
    """Folder automation, or None when disabled."""
    if not settings.folder_automation_enabled:
        return None
    provider = LocalFolderProvider(Path(settings.folder_root))
    return FolderAutomationService(provider, projects, work_orders)
