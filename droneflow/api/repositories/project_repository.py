"""
Project Repository for DroneFlow.

Handles project persistence using the class-based repository pattern.
"""

import logging
from typing import Optional

from droneflow.api.models import Project
from droneflow.api.repositories.base import LifecycleRepository, to_text
from droneflow.domain.lifecycle import ProjectStatus

logger = logging.getLogger(__name__)


class ProjectRepository(LifecycleRepository):
    """Repository for project records."""

    model = Project
    status_column = "projectstatus"
    coercers = {
        "meetingnotes": to_text,
        "contractdocumentpdf_path": to_text,
        "projectboundarykml_path": to_text,
    }

    async def create(
        self,
        project_name: str,
        client_name: Optional[str] = None,
        project_description: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Project:
        """
        Create a new project in the initial lifecycle status.

        Args:
            project_name: Human-readable project name
            client_name: Client organisation
            project_description: Optional free-text description
            created_by: User creating the project

        Returns:
            Created Project
        """
        project = Project(
            project_name=project_name,
            client_name=client_name,
            project_description=project_description,
            project_status=ProjectStatus.INITIAL,
            created_by=created_by,
        )
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)

        logger.info(f"Created project: {project.project_id} - {project_name}")
        return project
