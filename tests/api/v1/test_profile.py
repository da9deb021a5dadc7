import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.models.audit_log_model import AuditLogModel
from app.models.child_model import ChildModel


@pytest.mark.asyncio
async def test_profile_is_created_on_first_access(client: AsyncClient, user_id):
    response = await client.get("/api/v1/profile")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(user_id)
    assert data["email"] == "parent@example.com"
    assert data["full_name"] is None


@pytest.mark.asyncio
async def test_update_profile_name(client: AsyncClient):
    response = await client.put("/api/v1/profile", json={"full_name": "Jordan"})

    assert response.status_code == 200
    assert response.json()["full_name"] == "Jordan"

    response = await client.get("/api/v1/profile")
    assert response.json()["full_name"] == "Jordan"


@pytest.mark.asyncio
async def test_update_profile_rejects_empty_name(client: AsyncClient):
    response = await client.put("/api/v1/profile", json={"full_name": ""})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_account_keeps_audit_trail(
    client: AsyncClient,
    add_child,
    add_behavior_log,
    user_id,
    other_user_id,
    session_factory,
):
    await client.get("/api/v1/profile")
    child = await add_child(user_id)
    await add_behavior_log(child)
    await add_child(other_user_id)

    response = await client.delete("/api/v1/profile")

    assert response.status_code == 200
    async with session_factory() as session:
        children = (await session.execute(select(ChildModel))).scalars().all()
        audit = (await session.execute(select(AuditLogModel))).scalars().all()
    assert [c.parent_id for c in children] == [other_user_id]
    assert {(a.action, a.table_name) for a in audit} == {
        ("view", "profiles"),
        ("delete", "profiles"),
    }
