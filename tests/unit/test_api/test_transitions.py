"""Unit tests for status transition API endpoints."""

import pytest

NOW = "2025-03-03T12:00:00Z"


class TestTransitionLookups:
    """Tests for the /transitions table lookups."""

    @pytest.mark.asyncio
    async def test_allowed_meeting_transitions(self, client) -> None:
        resp = await client.get("/api/v1/transitions/meeting/IN_PROGRESS")
        assert resp.status_code == 200
        data = resp.json()
        assert data["allowed_targets"] == ["ADJOURNED", "RECESSED"]
        assert data["available_commands"] == ["recess", "adjourn"]
        assert data["is_terminal"] is False

    @pytest.mark.asyncio
    async def test_terminal_status(self, client) -> None:
        resp = await client.get("/api/v1/transitions/executive-session/CERTIFIED")
        data = resp.json()
        assert data["allowed_targets"] == []
        assert data["is_terminal"] is True
        assert data["available_commands"] == []

    @pytest.mark.asyncio
    async def test_unknown_status_is_bad_request(self, client) -> None:
        resp = await client.get("/api/v1/transitions/minutes/ADJOURNED")
        assert resp.status_code == 400
        assert "detail" in resp.json()

    @pytest.mark.asyncio
    async def test_unknown_entity(self, client) -> None:
        resp = await client.get("/api/v1/transitions/ordinance/DRAFT")
        assert resp.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("entity", "from_status", "to_status", "allowed"),
        [
            ("agenda", "DRAFT", "PUBLISHED", True),
            ("agenda-item", "TABLED", "IN_PROGRESS", False),
            ("minutes", "APPROVED", "AMENDED", True),
        ],
    )
    async def test_check(self, client, entity, from_status, to_status, allowed) -> None:
        resp = await client.post(
            f"/api/v1/transitions/{entity}/check", json={"from_status": from_status, "to_status": to_status}
        )
        assert resp.status_code == 200
        assert resp.json()["allowed"] is allowed


class TestMeetingTransition:
    """Tests for POST /api/v1/meetings/transition."""

    @pytest.mark.asyncio
    async def test_post_notice_command(self, client, meeting_payload) -> None:
        meeting_payload["status"] = "SCHEDULED"
        resp = await client.post(
            "/api/v1/meetings/transition", json={"meeting": meeting_payload, "command": "post_notice", "now": NOW}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "NOTICED"
        assert data["notice_posted_at"] is not None

    @pytest.mark.asyncio
    async def test_insufficient_notice(self, client, meeting_payload) -> None:
        meeting_payload["status"] = "SCHEDULED"
        resp = await client.post(
            "/api/v1/meetings/transition",
            json={"meeting": meeting_payload, "to_status": "NOTICED", "now": "2025-03-05T12:00:00Z"},
        )
        assert resp.status_code == 400
        data = resp.json()
        assert data["code"] == "MEETINGS.INSUFFICIENT_NOTICE"
        assert data["statutory_cite"] == "IC 5-14-1.5-5"
        assert data["details"]["actual_hours"] == 24

    @pytest.mark.asyncio
    async def test_invalid_transition_is_conflict(self, client, meeting_payload) -> None:
        resp = await client.post(
            "/api/v1/meetings/transition", json={"meeting": meeting_payload, "to_status": "DRAFT", "now": NOW}
        )
        assert resp.status_code == 409
        assert resp.json()["code"] == "MEETINGS.INVALID_TRANSITION"

    @pytest.mark.asyncio
    async def test_adjourn_blocked_by_uncertified_session(self, client, meeting_payload) -> None:
        meeting_payload["executive_sessions"] = [
            {"id": "es-1", "meeting_id": "mtg-1", "status": "ENDED", "basis_code": "PERSONNEL"}
        ]
        resp = await client.post(
            "/api/v1/meetings/transition", json={"meeting": meeting_payload, "command": "adjourn", "now": NOW}
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "COMPLIANCE.EXEC_SESSION_UNCERTIFIED"

    @pytest.mark.asyncio
    async def test_target_and_command_both_given(self, client, meeting_payload) -> None:
        resp = await client.post(
            "/api/v1/meetings/transition",
            json={"meeting": meeting_payload, "to_status": "ADJOURNED", "command": "adjourn"},
        )
        assert resp.status_code == 422


class TestOtherEntityTransitions:
    @pytest.mark.asyncio
    async def test_exec_session_requires_pre_certification(self, client) -> None:
        session = {"id": "es-1", "meeting_id": "mtg-1", "basis_code": "PERSONNEL"}
        resp = await client.post(
            "/api/v1/executive-sessions/transition", json={"session": session, "to_status": "IN_SESSION"}
        )
        assert resp.status_code == 400

        session |= {"pre_cert_statement": "Personnel matters only", "pre_cert_by": "chair"}
        resp = await client.post(
            "/api/v1/executive-sessions/transition",
            json={"session": session, "to_status": "IN_SESSION", "now": NOW},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "IN_SESSION"

    @pytest.mark.asyncio
    async def test_minutes_approval(self, client) -> None:
        minutes = {"id": "min-1", "meeting_id": "mtg-1", "status": "PENDING_APPROVAL"}
        resp = await client.post(
            "/api/v1/minutes/transition",
            json={"minutes": minutes, "to_status": "APPROVED", "approved_by": "clerk", "now": NOW},
        )
        assert resp.status_code == 200
        assert resp.json()["approved_by"] == "clerk"

    @pytest.mark.asyncio
    async def test_agenda_publish(self, client) -> None:
        resp = await client.post(
            "/api/v1/agendas/transition",
            json={"agenda": {"id": "ag-1", "meeting_id": "mtg-1"}, "to_status": "PUBLISHED", "now": NOW},
        )
        assert resp.status_code == 200
        assert resp.json()["published_at"] is not None

    @pytest.mark.asyncio
    async def test_agenda_item_illegal(self, client) -> None:
        item = {"id": "item-1", "meeting_id": "mtg-1", "title": "Rezoning", "status": "WITHDRAWN"}
        resp = await client.post("/api/v1/agenda-items/transition", json={"item": item, "to_status": "PENDING"})
        assert resp.status_code == 409


class TestNaiveTimestamps:
    """Timestamps without a UTC offset are rejected before reaching the compliance gates."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["scheduled_start", "now"])
    async def test_meeting_transition_rejected(self, client, meeting_payload, field) -> None:
        meeting_payload["status"] = "DRAFT"
        body = {"meeting": meeting_payload, "to_status": "SCHEDULED", "now": NOW}
        if field == "scheduled_start":
            meeting_payload["scheduled_start"] = "2025-03-10T19:00:00"
        else:
            body["now"] = "2025-03-03T12:00:00"
        resp = await client.post("/api/v1/meetings/transition", json=body)
        assert resp.status_code == 422
