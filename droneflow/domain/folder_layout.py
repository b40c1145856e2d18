"""
Storage folder layout for Projects and Work Orders.

Pure naming rules; the folder automation service turns a layout into
calls against a storage provider.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union


PROJECT_SUBFOLDERS = [
    "01_Contracts_Agreements",
    "02_Site_Boundary_KML",
    "03_Zone_Reference_KMLs",
    "04_Project_Wide_Deliverables",
    "05_Client_Shared",
]

WORK_ORDER_SUBFOLDERS = [
    "01_Quote_WO",
    "02_Invoice_WO",
    "03_Operational_Flight_Plans_WO",
    "04_Raw_Flight_Data_WO",
    "05_Processed_Deliverables_WO",
    "06_WorkOrder_Reports_WO",
]


@dataclass(frozen=True)
class FolderLayout:
    """A root folder name and the subfolders created beneath it."""
    name: str
    subfolders: List[str] = field(default_factory=list)


def project_folder_layout(project_id: str, project_name: str) -> FolderLayout:
    """
    Layout for a project root folder.

    Raises:
        ValueError: If project id or name is blank
    """
    if not project_id or not project_name or not project_name.strip():
        raise ValueError("Project ID and name are required")
    return FolderLayout(
        name=f"{project_id} - {project_name.strip()}",
        subfolders=list(PROJECT_SUBFOLDERS),
    )


def work_order_folder_layout(
    work_order_name: str,
    scheduled_date: Optional[Union[date, datetime, str]] = None,
) -> FolderLayout:
    """
    Layout for a work order folder, prefixed with its scheduled date if any.

    Raises:
        ValueError: If the work order name is blank
    """
    if not work_order_name or not work_order_name.strip():
        raise ValueError("Work Order name is required")

    prefix = ""
    if scheduled_date:
        if isinstance(scheduled_date, str):
            scheduled_date = date.fromisoformat(scheduled_date[:10])
        prefix = f"{scheduled_date:%Y-%m-%d} - "

    return FolderLayout(
        name=f"{prefix}{work_order_name.strip()}",
        subfolders=list(WORK_ORDER_SUBFOLDERS),
    )
