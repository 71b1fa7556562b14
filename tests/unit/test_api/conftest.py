"""Fixtures for API endpoint tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from meeting_compliance.main import create_app


@pytest.fixture
async def client():
    """HTTP client bound to a fresh application instance."""
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def meeting_payload() -> dict:
    """An in-progress council meeting with five of seven members present and a seconded motion."""
    return {
        "id": "mtg-1",
        "status": "IN_PROGRESS",
        "scheduled_start": "2025-03-06T12:00:00Z",
        "governing_body_id": "council",
        "attendance": [
            {"meeting_id": "mtg-1", "member_id": f"m{n}", "status": "PRESENT" if n <= 5 else "ABSENT"}
            for n in range(1, 8)
        ],
        "actions": [
            {
                "id": "motion-1",
                "meeting_id": "mtg-1",
                "action_type": "MOTION",
                "agenda_item_id": "item-1",
                "moved_by": "m1",
                "seconded_by": "m2",
            }
        ],
    }


@pytest.fixture
def body_payload() -> dict:
    return {"id": "council", "total_seats": 7, "name": "Town Council"}
