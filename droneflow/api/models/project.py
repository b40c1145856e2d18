"""
Project model for DroneFlow.

A survey engagement with one client. Column names are the lowercase keys
the lifecycle field registry reads gating fields by.
"""
import uuid

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from droneflow.core.database import Base
from droneflow.domain.lifecycle import ProjectStatus


def generate_project_id() -> str:
    """Prefixed short id, e.g. PRJ-1a2b3c4d."""
    return f"PRJ-{uuid.uuid4().hex[:8]}"


class Project(Base):
    """Top-level survey project; parent of work orders."""
    __tablename__ = "projects"

    project_id = Column("projectid", String(16), primary_key=True, default=generate_project_id)
    project_name = Column("projectname", String(200), nullable=False)
    client_name = Column("clientname", String(200))
    project_description = Column("projectdescription", Text)
    project_status = Column(
        "projectstatus", String(50), nullable=False,
        default=ProjectStatus.INITIAL, index=True,
    )

    # Gating fields
    meeting_notes = Column("meetingnotes", Text)
    contract_document_pdf_path = Column("contractdocumentpdf_path", String(500))
    project_boundary_kml_path = Column("projectboundarykml_path", String(500))

    # Storage folder
    folder_id = Column("projectfolderid_drive", String(200))
    folder_name = Column("projectfoldername_drive", String(300))

    created_by = Column("createdby", String(100))
    created_at = Column("createdat", DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        "updatedat", DateTime(timezone=True),
        server_default=func.now(), onupdate=func.now(), nullable=False,
    )

    def __repr__(self):
        return f"<Project {self.project_id}: {self.project_name}>"

    def to_record(self):
        """Lowercase-keyed snapshot, as the lifecycle engines read it."""
        record = {}
        for column in self.__table__.columns:
            value = getattr(self, self.__mapper__.get_property_by_column(column).key)
            if hasattr(value, "isoformat"):
                value = value.isoformat()
            record[column.name] = value
        return record
