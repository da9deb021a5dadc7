import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_complete_pending_recommendation(
    client: AsyncClient, add_child, add_recommendation, user_id
):
    child = await add_child(user_id)
    recommendation = await add_recommendation(child)

    response = await client.patch(
        f"/api/v1/recommendations/{recommendation.id}", json={"status": "completed"}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "completed"


@pytest.mark.asyncio
async def test_terminal_status_cannot_change(
    client: AsyncClient, add_child, add_recommendation, user_id
):
    child = await add_child(user_id)
    recommendation = await add_recommendation(child, status="skipped")

    response = await client.patch(
        f"/api/v1/recommendations/{recommendation.id}", json={"status": "completed"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT_ERROR"


@pytest.mark.asyncio
async def test_cannot_move_back_to_pending(
    client: AsyncClient, add_child, add_recommendation, user_id
):
    child = await add_child(user_id)
    recommendation = await add_recommendation(child)

    response = await client.patch(
        f"/api/v1/recommendations/{recommendation.id}", json={"status": "pending"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_status_is_rejected(
    client: AsyncClient, add_child, add_recommendation, user_id
):
    child = await add_child(user_id)
    recommendation = await add_recommendation(child)

    response = await client.patch(
        f"/api/v1/recommendations/{recommendation.id}", json={"status": "archived"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_foreign_recommendation_is_not_found(
    client: AsyncClient, add_child, add_recommendation, other_user_id
):
    child = await add_child(other_user_id)
    recommendation = await add_recommendation(child)

    response = await client.patch(
        f"/api/v1/recommendations/{recommendation.id}", json={"status": "completed"}
    )

    assert response.status_code == 404
