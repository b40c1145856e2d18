"""
Project Lifecycle API Endpoints

- GET  /lifecycle/statuses                   - All project statuses with guidance
- GET  /lifecycle/project/{project_id}/transitions - Available transitions
- POST /lifecycle/project/{project_id}/status      - Apply a transition
- POST /lifecycle/project/{project_id}/field       - Update a gating field
"""

from typing import List

from fastapi import APIRouter, Depends

from droneflow.api.dependencies import get_project_lifecycle_service
from droneflow.api.schemas.lifecycle import (
    FieldUpdateRequest,
    ProjectFieldUpdateResponse,
    ProjectStatusUpdateResponse,
    StatusGuidanceResponse,
    StatusUpdateRequest,
    TransitionCheckResponse,
    TransitionOptionResponse,
    TransitionsResponse,
)
from droneflow.api.services.lifecycle_service import ProjectLifecycleService

router = APIRouter(prefix="/lifecycle", tags=["project-lifecycle"])


@router.get(
    "/statuses",
    response_model=List[StatusGuidanceResponse],
    summary="List all project statuses",
)
async def list_project_statuses(
    service: ProjectLifecycleService = Depends(get_project_lifecycle_service),
) -> List[StatusGuidanceResponse]:
    return [StatusGuidanceResponse(**s) for s in service.list_statuses()]


@router.get(
    "/project/{project_id}/transitions",
    response_model=TransitionsResponse,
    summary="Get available status transitions for a project",
    description="""
    Returns the project's current status and guidance, and every status it can
    move to next. Each transition carries **requirementsMet** and the message to
    show when a gating field is still missing.
    """,
)
async def get_project_transitions(
    project_id: str,
    service: ProjectLifecycleService = Depends(get_project_lifecycle_service),
) -> TransitionsResponse:
    overview = await service.list_transitions(project_id)
    return TransitionsResponse(
        current_status=overview.current_status,
        current_guidance=overview.current_guidance,
        available_transitions=[
            TransitionOptionResponse(**vars(t)) for t in overview.available_transitions
        ],
    )


@router.post(
    "/project/{project_id}/status",
    response_model=ProjectStatusUpdateResponse,
    summary="Move a project to a new status",
)
async def update_project_status(
    project_id: str,
    request: StatusUpdateRequest,
    service: ProjectLifecycleService = Depends(get_project_lifecycle_service),
) -> ProjectStatusUpdateResponse:
    outcome = await service.apply_transition(project_id, request.next_status)
    return ProjectStatusUpdateResponse(
        message=outcome.message,
        project=outcome.record,
        guidance=outcome.guidance,
    )


@router.post(
    "/project/{project_id}/field",
    response_model=ProjectFieldUpdateResponse,
    summary="Update a field required for a status transition",
)
async def update_project_transition_field(
    project_id: str,
    request: FieldUpdateRequest,
    service: ProjectLifecycleService = Depends(get_project_lifecycle_service),
) -> ProjectFieldUpdateResponse:
    outcome = await service.update_gating_field(project_id, request.field, request.value)
    return ProjectFieldUpdateResponse(
        message=outcome.message,
        project=outcome.record,
        available_transitions=[
            TransitionCheckResponse(
                status=t.status,
                requirements_met=t.requirements_met,
                requirements_message=t.requirements_message,
            )
            for t in outcome.available_transitions
        ],
    )
