import uuid
from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.models.audit_log_model import AuditLogModel
from app.models.recommendation_model import RecommendationModel
from app.services import analysis as analysis_service

ANALYZE_URL = "/api/v1/ai/analyze"
GENERATION_FAILURE = {
    "error": {
        "code": "GENERATION_ERROR",
        "message": "Failed to generate recommendations",
    }
}


async def stored_recommendations(session_factory, child_id):
    async with session_factory() as session:
        result = await session.execute(
            select(RecommendationModel).where(RecommendationModel.child_id == child_id)
        )
        return result.scalars().all()


async def audit_entries(session_factory):
    async with session_factory() as session:
        return (await session.execute(select(AuditLogModel))).scalars().all()


@pytest.mark.asyncio
async def test_analyze_returns_and_stores_recommendations(
    client: AsyncClient, add_child, user_id, fake_llm, session_factory
):
    child = await add_child(user_id)
    calls = fake_llm()

    response = await client.post(ANALYZE_URL, json={"childId": str(child.id)})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert len(data["recommendations"]) == 4
    assert data["insights"]["triggerAnalysis"].startswith("Loud environments")
    assert len(calls) == 1

    rows = await stored_recommendations(session_factory, child.id)
    assert len(rows) == 4
    assert {row.status for row in rows} == {"pending"}
    assert {row.parent_id for row in rows} == {user_id}
    assert {row.recommendation_date for row in rows} == {date.today()}

    entries = await audit_entries(session_factory)
    assert [(e.action, e.table_name) for e in entries] == [
        ("create", "ai_recommendations")
    ]
    assert entries[0].record_id == str(child.id)


@pytest.mark.asyncio
async def test_analyze_sends_only_the_last_thirty_days(
    client: AsyncClient, add_child, add_behavior_log, add_activity, user_id, fake_llm
):
    child = await add_child(user_id, diagnosis="Autism spectrum disorder")
    today = date.today()
    await add_behavior_log(
        child, log_date=today - timedelta(days=5), triggers="Crowded supermarket"
    )
    await add_behavior_log(
        child, log_date=today - timedelta(days=45), triggers="Ancient history"
    )
    calls = fake_llm()

    response = await client.post(ANALYZE_URL, json={"childId": str(child.id)})

    assert response.status_code == 200
    document = calls[0]["messages"][-1]["content"]
    assert "Diagnosis: Autism spectrum disorder" in document
    assert "Recent Behavior Logs (1 entries):" in document
    assert "Crowded supermarket" in document
    assert "Ancient history" not in document
    assert "No activities available" in document


@pytest.mark.asyncio
async def test_analyze_requires_child_id(client: AsyncClient, fake_llm):
    calls = fake_llm()

    response = await client.post(ANALYZE_URL, json={})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Child ID is required"
    assert calls == []


@pytest.mark.asyncio
async def test_analyze_rejects_malformed_child_id(client: AsyncClient, fake_llm):
    fake_llm()

    response = await client.post(ANALYZE_URL, json={"childId": "child-1"})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Child ID must be a valid UUID"


@pytest.mark.asyncio
async def test_analyze_requires_authentication(
    anonymous_client: AsyncClient, fake_llm
):
    calls = fake_llm()

    response = await anonymous_client.post(
        ANALYZE_URL, json={"childId": str(uuid.uuid4())}
    )

    assert response.status_code == 401
    assert calls == []


@pytest.mark.asyncio
async def test_analyze_foreign_child_matches_missing_child(
    client: AsyncClient, add_child, other_user_id, fake_llm
):
    calls = fake_llm()
    foreign = await add_child(other_user_id)

    foreign_response = await client.post(ANALYZE_URL, json={"childId": str(foreign.id)})
    missing_response = await client.post(
        ANALYZE_URL, json={"childId": str(uuid.uuid4())}
    )

    assert foreign_response.status_code == 404
    assert foreign_response.json() == missing_response.json()
    assert foreign_response.json()["error"]["message"] == "Child not found"
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [3, 7])
async def test_analyze_rejects_wrong_number_of_recommendations(
    client: AsyncClient,
    add_child,
    user_id,
    fake_llm,
    analysis_payload,
    session_factory,
    count,
):
    child = await add_child(user_id)
    fake_llm(analysis_payload(count))

    response = await client.post(ANALYZE_URL, json={"childId": str(child.id)})

    assert response.status_code == 500
    assert response.json() == GENERATION_FAILURE
    assert await stored_recommendations(session_factory, child.id) == []


@pytest.mark.asyncio
async def test_analyze_rejects_non_json_output(
    client: AsyncClient, add_child, user_id, fake_llm
):
    child = await add_child(user_id)
    fake_llm("Here are some ideas: go outside more.")

    response = await client.post(ANALYZE_URL, json={"childId": str(child.id)})

    assert response.status_code == 500
    assert response.json() == GENERATION_FAILURE


@pytest.mark.asyncio
async def test_analyze_hides_provider_errors(
    client: AsyncClient, add_child, user_id, fake_llm, session_factory
):
    child = await add_child(user_id)
    calls = fake_llm(error=RuntimeError("upstream 503: api key sk-secret rejected"))

    response = await client.post(ANALYZE_URL, json={"childId": str(child.id)})

    assert response.status_code == 500
    assert response.json() == GENERATION_FAILURE
    assert "sk-secret" not in response.text
    assert len(calls) == 1
    assert await stored_recommendations(session_factory, child.id) == []


@pytest.mark.asyncio
async def test_analyze_returns_result_when_saving_fails(
    client: AsyncClient, add_child, user_id, fake_llm, session_factory, monkeypatch
):
    child = await add_child(user_id)
    fake_llm()
    original = analysis_service.to_recommendation_rows

    def rows_that_cannot_be_saved(*args, **kwargs):
        rows = original(*args, **kwargs)
        for row in rows:
            row.title = None
        return rows

    monkeypatch.setattr(
        analysis_service, "to_recommendation_rows", rows_that_cannot_be_saved
    )

    response = await client.post(ANALYZE_URL, json={"childId": str(child.id)})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(response.json()["recommendations"]) == 4
    assert await stored_recommendations(session_factory, child.id) == []
    assert await audit_entries(session_factory) == []
