"""API tests for the editor session and its actions."""

import pytest

from sitebuilder.domain.exceptions import ImageSearchError

HEADERS = {"X-User-Id": "user-1"}
PROFILE = {"name": "Pinewood Dental", "type": "Dental clinic", "location": "Denver, CO, USA"}


async def _onboard(client) -> None:
    response = await client.put("/api/profile", json=PROFILE, headers=HEADERS)
    assert response.status_code == 200


async def _act(client, **action) -> dict:
    response = await client.post("/api/editor/actions", json=action, headers=HEADERS)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_editor_requires_onboarding(client):
    response = await client.get("/api/editor", headers=HEADERS)

    assert response.status_code == 409
    assert response.json()["missing"] == ["name", "type", "location"]


@pytest.mark.asyncio
async def test_open_editor_generates_website(client):
    await _onboard(client)

    response = await client.get("/api/editor", headers=HEADERS)

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["website"]["title"] == "Pinewood Dental Website"
    assert len(state["website"]["blocks"]) == 7
    assert state["panel"] is None
    assert state["status"] == "draft"


@pytest.mark.asyncio
async def test_missing_image_key_is_reported(client, harness):
    harness.images._fail_when = lambda q: ImageSearchError(
        500, "PEXELS_API_KEY is not configured", missing_credential="PEXELS_API_KEY"
    )
    await _onboard(client)

    response = await client.get("/api/editor", headers=HEADERS)

    assert response.status_code == 500
    assert response.json() == {
        "error": "PEXELS_API_KEY is not configured. Please set PEXELS_API_KEY."
    }


@pytest.mark.asyncio
async def test_menu_delete_through_actions(client):
    await _onboard(client)
    state = (await client.get("/api/editor", headers=HEADERS)).json()["state"]
    hero_id = state["website"]["blocks"][0]["id"]

    state = (await _act(client, action="double-click-block", blockId=hero_id, x=300, y=400))["state"]
    assert state["floatingMenu"]["blockId"] == hero_id

    result = await _act(client, action="menu-action", menuAction="delete")

    assert result["applied"] is True
    ids = [b["id"] for b in result["state"]["website"]["blocks"]]
    assert hero_id not in ids
    assert result["state"]["selectedBlockId"] is None
    assert result["state"]["floatingMenu"] is None


@pytest.mark.asyncio
async def test_add_section_and_recent_projects(client):
    await _onboard(client)
    state = (await client.get("/api/editor", headers=HEADERS)).json()["state"]
    hero_id = state["website"]["blocks"][0]["id"]

    await _act(client, action="open-add-section", afterId=hero_id)
    result = await _act(client, action="add-section", sectionId="banner-grid")

    blocks = result["state"]["website"]["blocks"]
    assert blocks[1]["type"] == "banner-grid"
    assert result["state"]["panel"] is None

    response = await client.get("/api/projects/recent", headers=HEADERS)
    projects = response.json()
    assert len(projects) == 1
    assert projects[0]["id"] == state["website"]["id"]
    assert projects[0]["businessName"] == "Pinewood Dental"


@pytest.mark.asyncio
async def test_unknown_section_is_404(client):
    await _onboard(client)
    response = await client.post(
        "/api/editor/actions",
        json={"action": "add-section", "sectionId": "carousel"},
        headers=HEADERS,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_action_is_422(client):
    await _onboard(client)
    response = await client.post("/api/editor/actions", json={"action": "explode"}, headers=HEADERS)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_preview_blocks_edits(client):
    await _onboard(client)
    state = (await client.get("/api/editor", headers=HEADERS)).json()["state"]
    hero_id = state["website"]["blocks"][0]["id"]

    await _act(client, action="set-preview", enabled=True)
    result = await _act(client, action="change-text", blockId=hero_id, field="title", value="Nope")

    assert result["applied"] is False
    assert result["state"]["previewMode"] is True
    assert result["state"]["website"]["blocks"][0]["content"]["title"] == "Welcome to Pinewood Dental"


@pytest.mark.asyncio
async def test_regenerate_website(client):
    await _onboard(client)
    first = (await client.get("/api/editor", headers=HEADERS)).json()["state"]["website"]["id"]

    response = await client.post("/api/editor/generate", json={}, headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["state"]["website"]["id"] != first
