"""
Project lifecycle.

Planning -> Discovery/Meeting -> Proposal/Contract Drafting -> Proposal/Contract Sent
  -> Client Agreement Pending -> Project Approved -> Active - Ongoing
  -> Project Review -> Archiving -> Completed

On Hold can return to any earlier working status. Completed, Lost and
Cancelled are terminal.
"""

from droneflow.domain.lifecycle.engine import (
    FieldRegistry,
    LifecycleEngine,
    StatusGraph,
    TransitionRequirement,
)


class ProjectStatus:
    """Project status values, in declared order."""
    PLANNING = "Planning"
    DISCOVERY = "Discovery/Meeting"
    PROPOSAL_DRAFTING = "Proposal/Contract Drafting"
    PROPOSAL_SENT = "Proposal/Contract Sent"
    CLIENT_AGREEMENT_PENDING = "Client Agreement Pending"
    PROJECT_APPROVED = "Project Approved"
    ACTIVE = "Active - Ongoing"
    PROJECT_REVIEW = "Project Review"
    ARCHIVING = "Archiving"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    LOST = "Lost"
    CANCELLED = "Cancelled"

    ALL = [
        PLANNING, DISCOVERY, PROPOSAL_DRAFTING, PROPOSAL_SENT,
        CLIENT_AGREEMENT_PENDING, PROJECT_APPROVED, ACTIVE, PROJECT_REVIEW,
        ARCHIVING, COMPLETED, ON_HOLD, LOST, CANCELLED,
    ]

    INITIAL = PLANNING


S = ProjectStatus

PROJECT_TRANSITIONS = {
    S.PLANNING: [S.DISCOVERY, S.CANCELLED, S.ON_HOLD, S.LOST],
    S.DISCOVERY: [S.PROPOSAL_DRAFTING, S.PLANNING, S.CANCELLED, S.ON_HOLD, S.LOST],
    S.PROPOSAL_DRAFTING: [S.PROPOSAL_SENT, S.DISCOVERY, S.CANCELLED, S.ON_HOLD, S.LOST],
    S.PROPOSAL_SENT: [
        S.CLIENT_AGREEMENT_PENDING, S.PROPOSAL_DRAFTING, S.CANCELLED, S.ON_HOLD, S.LOST,
    ],
    S.CLIENT_AGREEMENT_PENDING: [
        S.PROJECT_APPROVED, S.PROPOSAL_DRAFTING, S.CANCELLED, S.ON_HOLD, S.LOST,
    ],
    S.PROJECT_APPROVED: [S.ACTIVE, S.CANCELLED, S.ON_HOLD],
    S.ACTIVE: [S.PROJECT_REVIEW, S.CANCELLED, S.ON_HOLD],
    S.PROJECT_REVIEW: [S.ARCHIVING, S.ACTIVE, S.CANCELLED, S.ON_HOLD],
    S.ARCHIVING: [S.COMPLETED, S.PROJECT_REVIEW, S.CANCELLED],
    S.COMPLETED: [],  # Terminal state
    S.ON_HOLD: [
        S.PLANNING, S.DISCOVERY, S.PROPOSAL_DRAFTING, S.PROPOSAL_SENT,
        S.CLIENT_AGREEMENT_PENDING, S.PROJECT_APPROVED, S.ACTIVE, S.PROJECT_REVIEW,
        S.CANCELLED, S.LOST,
    ],
    S.LOST: [],  # Terminal state
    S.CANCELLED: [],  # Terminal state
}

PROJECT_REQUIREMENTS = {
    (S.PLANNING, S.DISCOVERY): TransitionRequirement(
        required_fields=("projectName", "clientName"),
        message="Project and client names are required to proceed to Discovery/Meeting phase.",
    ),
    (S.DISCOVERY, S.PROPOSAL_DRAFTING): TransitionRequirement(
        required_fields=("meetingNotes",),
        message="Meeting notes are required to proceed to Proposal/Contract Drafting phase.",
    ),
    (S.PROPOSAL_DRAFTING, S.PROPOSAL_SENT): TransitionRequirement(
        required_fields=("contractDocumentPDF_Path",),
        message="Contract document must be uploaded to proceed to Proposal/Contract Sent phase.",
    ),
    (S.PROJECT_APPROVED, S.ACTIVE): TransitionRequirement(
        required_fields=("projectBoundaryKML_Path",),
        message="Project boundary KML file must be uploaded to proceed to Active phase.",
    ),
}

PROJECT_GUIDANCE = {
    S.PLANNING: (
        "Initial project planning stage. Define project scope, objectives, and target "
        "client. Once details are finalized, move to Discovery/Meeting phase."
    ),
    S.DISCOVERY: (
        "Schedule and conduct initial client meetings. Document requirements, "
        "expectations, and any special considerations. Complete meeting notes before "
        "progressing."
    ),
    S.PROPOSAL_DRAFTING: (
        "Draft a detailed proposal and contract for the client. Include scope, timeline, "
        "deliverables, and pricing. Upload the final contract before proceeding."
    ),
    S.PROPOSAL_SENT: (
        "Contract has been sent to the client. Follow up as needed and update status "
        "when client responds."
    ),
    S.CLIENT_AGREEMENT_PENDING: (
        "Client is reviewing the proposal. Stay in contact and address any questions "
        "or concerns."
    ),
    S.PROJECT_APPROVED: (
        "Client has approved the project. Prepare for execution by uploading the "
        "project boundary file."
    ),
    S.ACTIVE: (
        "Project is in active execution. Create work orders, assign resources, and "
        "track progress."
    ),
    S.PROJECT_REVIEW: (
        "All work orders are complete. Review deliverables, gather feedback, and "
        "prepare final documentation."
    ),
    S.ARCHIVING: (
        "Organize and archive all project materials. Ensure all client deliverables "
        "have been provided."
    ),
    S.COMPLETED: "Project is successfully completed and closed. No further actions required.",
    S.ON_HOLD: "Project temporarily paused. Document the reason and expected resumption date.",
    S.LOST: "Client has decided not to proceed. Document reasons if known for future reference.",
    S.CANCELLED: "Project cancelled. Document reasons and lessons learned.",
}

# Logical field name -> persisted (lowercase) column key
PROJECT_FIELDS = FieldRegistry(
    status_key="projectstatus",
    columns={
        "projectName": "projectname",
        "clientName": "clientname",
        "meetingNotes": "meetingnotes",
        "contractDocumentPDF_Path": "contractdocumentpdf_path",
        "projectBoundaryKML_Path": "projectboundarykml_path",
    },
)

# Fields the gating-field endpoint may write
PROJECT_UPDATABLE_FIELDS = (
    "meetingNotes",
    "contractDocumentPDF_Path",
    "projectBoundaryKML_Path",
)


class ProjectLifecycleEngine(LifecycleEngine):
    """Lifecycle engine wired with the project tables."""

    def __init__(
        self,
        transitions=None,
        requirements=None,
        guidance=None,
    ):
        super().__init__(
            entity_name="project",
            graph=StatusGraph(transitions if transitions is not None else PROJECT_TRANSITIONS),
            requirements=requirements if requirements is not None else PROJECT_REQUIREMENTS,
            guidance=guidance if guidance is not None else PROJECT_GUIDANCE,
            fields=PROJECT_FIELDS,
            statuses=ProjectStatus.ALL,
        )


project_lifecycle = ProjectLifecycleEngine()
