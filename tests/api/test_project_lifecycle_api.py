"""Tests for /api/lifecycle project endpoints."""

import pytest


@pytest.fixture
def project_id(client):
    response = client.post("/api/projects", json={
        "projectName": "North Ridge", "clientName": "Ridge Mining",
    })
    return response.json()["projectid"]


class TestStatuses:

    def test_lists_all_project_statuses(self, client):
        statuses = client.get("/api/lifecycle/statuses").json()
        assert len(statuses) == 13
        assert statuses[0]["status"] == "Planning"
        assert statuses[0]["guidance"].startswith("Initial project planning stage")


class TestTransitions:

    def test_transitions_for_new_project(self, client, project_id):
        response = client.get(f"/api/lifecycle/project/{project_id}/transitions")
        assert response.status_code == 200
        data = response.json()
        assert data["currentStatus"] == "Planning"
        assert [t["status"] for t in data["availableTransitions"]] == [
            "Discovery/Meeting", "Cancelled", "On Hold", "Lost",
        ]
        first = data["availableTransitions"][0]
        assert first["requirementsMet"] is True
        assert first["buttonLabel"] == "Move to Discovery/Meeting"

    def test_transitions_for_missing_project(self, client):
        response = client.get("/api/lifecycle/project/PRJ-nothere/transitions")
        assert response.status_code == 404


class TestStatusUpdate:

    def test_valid_transition(self, client, project_id):
        response = client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": "Discovery/Meeting"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Project status updated to 'Discovery/Meeting'"
        assert data["project"]["projectstatus"] == "Discovery/Meeting"
        assert data["guidance"].startswith("Schedule and conduct")

    def test_unmet_requirement_is_rejected(self, client, project_id):
        client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": "Discovery/Meeting"},
        )
        response = client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": "Proposal/Contract Drafting"},
        )
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error_code"] == "INVALID_TRANSITION"
        assert detail["message"] == (
            "Meeting notes are required to proceed to Proposal/Contract Drafting phase."
        )

    def test_unconnected_status_is_rejected(self, client, project_id):
        response = client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": "Completed"},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["message"] == (
            "Cannot transition from 'Planning' to 'Completed'"
        )
        record = client.get(f"/api/projects/{project_id}").json()
        assert record["projectstatus"] == "Planning"

    def test_missing_next_status(self, client, project_id):
        response = client.post(f"/api/lifecycle/project/{project_id}/status", json={})
        assert response.status_code == 422


class TestFieldUpdate:

    def test_field_update_unblocks_transition(self, client, project_id):
        client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": "Discovery/Meeting"},
        )
        response = client.post(
            f"/api/lifecycle/project/{project_id}/field",
            json={"field": "meetingNotes", "value": "Kickoff held on site"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Field 'meetingNotes' updated successfully"
        assert data["project"]["meetingnotes"] == "Kickoff held on site"
        assert data["availableTransitions"][0] == {
            "status": "Proposal/Contract Drafting",
            "requirementsMet": True,
            "requirementsMessage": "",
        }

        moved = client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": "Proposal/Contract Drafting"},
        )
        assert moved.status_code == 200

    def test_status_cannot_be_set_as_a_field(self, client, project_id):
        response = client.post(
            f"/api/lifecycle/project/{project_id}/field",
            json={"field": "projectStatus", "value": "Completed"},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["message"] == (
            "Field 'projectStatus' cannot be updated through this endpoint"
        )


class TestFieldValueTypes:

    @pytest.mark.parametrize("value", [{"a": 1}, ["notes"], 42])
    def test_non_text_value_is_refused(self, client, project_id, value):
        response = client.post(
            f"/api/lifecycle/project/{project_id}/field",
            json={"field": "meetingNotes", "value": value},
        )
        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "VALIDATION_ERROR"
        record = client.get(f"/api/projects/{project_id}").json()
        assert record["meetingnotes"] is None

    def test_text_value_can_be_cleared(self, client, project_id):
        client.post(
            f"/api/lifecycle/project/{project_id}/field",
            json={"field": "contractDocumentPDF_Path", "value": "contracts/c1.pdf"},
        )
        response = client.post(
            f"/api/lifecycle/project/{project_id}/field",
            json={"field": "contractDocumentPDF_Path", "value": None},
        )
        assert response.status_code == 200
        assert response.json()["project"]["contractdocumentpdf_path"] is None


class TestEmptyTarget:

    def test_empty_next_status_gets_engine_message(self, client, project_id):
        response = client.post(
            f"/api/lifecycle/project/{project_id}/status",
            json={"nextStatus": ""},
        )
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error_code"] == "INVALID_TRANSITION"
        assert detail["message"] == "Cannot transition from 'Planning' to ''"
