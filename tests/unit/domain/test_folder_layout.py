"""Tests for folder naming rules."""

from datetime import date, datetime

import pytest

from droneflow.domain.folder_layout import (
    PROJECT_SUBFOLDERS,
    WORK_ORDER_SUBFOLDERS,
    project_folder_layout,
    work_order_folder_layout,
)


class TestProjectFolderLayout:

    def test_name_combines_id_and_name(self):
        layout = project_folder_layout("PRJ-1a2b3c4d", "  North Ridge  ")
        assert layout.name == "PRJ-1a2b3c4d - North Ridge"
        assert layout.subfolders == PROJECT_SUBFOLDERS

    @pytest.mark.parametrize("project_id,name", [("", "x"), ("PRJ-1", ""), ("PRJ-1", "   ")])
    def test_blank_values_rejected(self, project_id, name):
        with pytest.raises(ValueError):
            project_folder_layout(project_id, name)

    def test_subfolders_are_copied(self):
        layout = project_folder_layout("PRJ-1", "A")
        layout.subfolders.append("extra")
        assert "extra" not in PROJECT_SUBFOLDERS


class TestWorkOrderFolderLayout:

    def test_without_date(self):
        layout = work_order_folder_layout("Initial Mapping")
        assert layout.name == "Initial Mapping"
        assert layout.subfolders == WORK_ORDER_SUBFOLDERS

    @pytest.mark.parametrize("scheduled", [
        date(2026, 3, 9),
        datetime(2026, 3, 9, 14, 30),
        "2026-03-09",
        "2026-03-09T14:30:00",
    ])
    def test_date_prefix(self, scheduled):
        layout = work_order_folder_layout("Initial Mapping", scheduled)
        assert layout.name == "2026-03-09 - Initial Mapping"

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            work_order_folder_layout(" ")
