"""
Project and Work Order record endpoints.

Creation only sets the initial lifecycle status; every later status
change goes through the lifecycle routers.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from droneflow.api.dependencies import (
    get_folder_automation,
    get_project_repository,
    get_work_order_repository,
)
from droneflow.api.exceptions import NotFoundError
from droneflow.api.repositories import ProjectRepository, WorkOrderRepository
from droneflow.api.schemas.lifecycle import ProjectCreateRequest, WorkOrderCreateRequest
from droneflow.api.services.folder_automation_service import FolderAutomationService

router = APIRouter(tags=["records"])
logger = logging.getLogger(__name__)


@router.post("/projects", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreateRequest,
    projects: ProjectRepository = Depends(get_project_repository),
    folders: Optional[FolderAutomationService] = Depends(get_folder_automation),
) -> Dict[str, Any]:
    project = await projects.create(
        project_name=request.project_name,
        client_name=request.client_name,
        project_description=request.project_description,
    )
    if folders is not None:
        await folders.handle_project_created(project)
        await projects.db.refresh(project)
    return project.to_record()


@router.get("/projects/{project_id}")
async def get_project(
    project_id: str,
    projects: ProjectRepository = Depends(get_project_repository),
) -> Dict[str, Any]:
    project = await projects.get(project_id)
    if project is None:
        raise NotFoundError("project", project_id)
    return project.to_record()


@router.post("/workorders", status_code=status.HTTP_201_CREATED)
async def create_work_order(
    request: WorkOrderCreateRequest,
    projects: ProjectRepository = Depends(get_project_repository),
    work_orders: WorkOrderRepository = Depends(get_work_order_repository),
    folders: Optional[FolderAutomationService] = Depends(get_folder_automation),
) -> Dict[str, Any]:
    if await projects.get(request.project_id) is None:
        raise NotFoundError("project", request.project_id)

    work_order = await work_orders.create(
        project_id=request.project_id,
        work_order_name=request.work_order_name,
        scheduled_date=request.scheduled_date,
        services_requested=request.services_requested_wo,
    )
    if folders is not None:
        await folders.handle_work_order_created(work_order)
        await work_orders.db.refresh(work_order)
    return work_order.to_record()


@router.get("/workorders/{work_order_id}")
async def get_work_order(
    work_order_id: int,
    work_orders: WorkOrderRepository = Depends(get_work_order_repository),
) -> Dict[str, Any]:
    work_order = await work_orders.get(work_order_id)
    if work_order is None:
        raise NotFoundError("work order", work_order_id)
    return work_order.to_record()


@router.get("/projects/{project_id}/workorders")
async def list_project_work_orders(
    project_id: str,
    projects: ProjectRepository = Depends(get_project_repository),
    work_orders: WorkOrderRepository = Depends(get_work_order_repository),
) -> Dict[str, Any]:
    if await projects.get(project_id) is None:
        raise NotFoundError("project", project_id)
    items = await work_orders.list_for_project(project_id)
    return {"project_id": project_id, "work_orders": [wo.to_record() for wo in items]}
