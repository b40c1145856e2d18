"""
Folder Automation Service

Creates the standard storage folder structure for new Projects and Work
Orders and records the root folder on the record. The storage backend is a
FolderProvider; a local-filesystem provider ships for development.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol

from droneflow.api.models import Project, WorkOrder
from droneflow.api.repositories import ProjectRepository, WorkOrderRepository
from droneflow.domain.folder_layout import (
    FolderLayout,
    project_folder_layout,
    work_order_folder_layout,
)

logger = logging.getLogger(__name__)


class FolderProvider(Protocol):
    """Protocol for a storage backend that can create folders."""

    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> str:
        """Create a folder and return its id."""
        ...


class LocalFolderProvider:
    """Folders on the local filesystem; ids are paths relative to the root."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> str:
        if "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"Invalid folder name: {name!r}")
        relative = Path(parent_id) / name if parent_id else Path(name)
        await asyncio.to_thread((self.root / relative).mkdir, parents=True, exist_ok=True)
        return relative.as_posix()


@dataclass
class CreatedFolders:
    """Root folder id/name and the subfolder ids created under it."""
    folder_id: str
    folder_name: str
    subfolder_ids: List[str] = field(default_factory=list)


class FolderAutomationService:
    """Provision folder structures and link them to their records."""

    def __init__(
        self,
        provider: FolderProvider,
        projects: ProjectRepository,
        work_orders: WorkOrderRepository,
    ):
        self.provider = provider
        self.projects = projects
        self.work_orders = work_orders

    async def _create(self, layout: FolderLayout, parent_id: Optional[str]) -> CreatedFolders:
        root_id = await self.provider.create_folder(layout.name, parent_id)
        subfolder_ids = []
        for subfolder in layout.subfolders:
            subfolder_ids.append(await self.provider.create_folder(subfolder, root_id))
        return CreatedFolders(folder_id=root_id, folder_name=layout.name, subfolder_ids=subfolder_ids)

    async def create_project_folders(self, project: Project) -> CreatedFolders:
        layout = project_folder_layout(project.project_id, project.project_name)
        created = await self._create(layout, parent_id=None)
        await self.projects.update_fields(project.project_id, {
            "projectfolderid_drive": created.folder_id,
            "projectfoldername_drive": created.folder_name,
        })
        return created

    async def create_work_order_folders(
        self, work_order: WorkOrder, project: Project
    ) -> CreatedFolders:
        """
        Raises:
            ValueError: If the project has no folder yet
        """
        if not project.folder_id:
            raise ValueError(f"Project {project.project_id} has no storage folder")
        layout = work_order_folder_layout(work_order.work_order_name, work_order.scheduled_date)
        created = await self._create(layout, parent_id=project.folder_id)
        await self.work_orders.update_fields(work_order.work_order_id, {
            "workorderfolderid_drive": created.folder_id,
            "workorderfoldername_drive": created.folder_name,
        })
        return created

    # -------------------------------------------------------------------------
    # Creation hooks: folder failures never fail record creation
    # -------------------------------------------------------------------------

    async def handle_project_created(self, project: Project) -> Optional[CreatedFolders]:
        try:
            created = await self.create_project_folders(project)
        except Exception:
            logger.exception(f"Error creating folders for project {project.project_id}")
            return None
        logger.info(f"Folders created for project {project.project_id}: {created.folder_id}")
        return created

    async def handle_work_order_created(self, work_order: WorkOrder) -> Optional[CreatedFolders]:
        project = await self.projects.get(work_order.project_id)
        if project is None or not project.folder_id:
            logger.warning(
                f"Skipping folders for work order {work_order.work_order_id}: "
                f"project {work_order.project_id} has no storage folder"
            )
            return None
        try:
            created = await self.create_work_order_folders(work_order, project)
        except Exception:
            logger.exception(f"Error creating folders for work order {work_order.work_order_id}")
            return None
        logger.info(f"Folders created for work order {work_order.work_order_id}: {created.folder_id}")
        return created
