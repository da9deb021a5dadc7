from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_missing_bearer_token_is_rejected(anonymous_client: AsyncClient):
    response = await anonymous_client.get("/api/v1/children/")

    assert response.status_code == 401
    assert response.json() == {
        "error": {
            "code": "AUTHENTICATION_ERROR",
            "message": "Authentication required",
        }
    }


@pytest.mark.asyncio
async def test_non_bearer_scheme_is_rejected(anonymous_client: AsyncClient):
    response = await anonymous_client.get(
        "/api/v1/children/", headers={"Authorization": "Basic dXNlcjpwYXNz"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_malformed_token_is_rejected(anonymous_client: AsyncClient):
    response = await anonymous_client.get(
        "/api/v1/children/", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "AUTHENTICATION_ERROR"
    assert error["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_expired_token_is_rejected(
    anonymous_client: AsyncClient, make_token, user_id
):
    token = make_token(user_id, exp=datetime.now(timezone.utc) - timedelta(minutes=5))

    response = await anonymous_client.get(
        "/api/v1/children/", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Token has expired"


@pytest.mark.asyncio
async def test_valid_token_is_accepted(client: AsyncClient):
    response = await client.get("/api/v1/children/")

    assert response.status_code == 200
    assert response.json() == {"children": []}
