import os

# Settings are read at import time, so the environment must be ready first
os.environ["SUPABASE_JWT_SECRET"] = "test-secret-that-is-long-enough-for-hs256"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"

import json
import uuid
from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import litellm
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app import database
from app.config import settings
from app.database import Base
from app.main import app
from app.models.activity_model import ActivityModel
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.models.recommendation_model import RecommendationModel


def _make_token(
    user_id: uuid.UUID, email: str = "parent@example.com", **claims
) -> str:
    payload = {
        "sub": str(user_id),
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    payload.update(claims)
    return jwt.encode(
        payload, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )


def _analysis_payload(count: int = 4) -> dict:
    """A well-formed model answer with ``count`` recommendations."""
    types = ["daily_plan", "exercise", "strategy", "intervention"]
    priorities = ["high", "medium", "low"]
    return {
        "recommendations": [
            {
                "type": types[i % len(types)],
                "title": f"Recommendation {i + 1}",
                "description": "Do this every morning.",
                "rationale": "Mornings have been hardest this month.",
                "priority": priorities[i % len(priorities)],
            }
            for i in range(count)
        ],
        "insights": {
            "behaviorPatterns": ["Calmer after outdoor play"],
            "triggerAnalysis": "Loud environments precede most meltdowns.",
            "progressSummary": "Sleep has improved steadily.",
            "areasOfConcern": ["Transitions between activities"],
        },
    }


def fake_completion_response(content: str) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(
            prompt_tokens=120, completion_tokens=80, total_tokens=200
        ),
    )


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine, monkeypatch):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    # get_db, the health check and the audit writer all open sessions here
    monkeypatch.setattr(database, "AsyncSessionLocal", factory)
    return factory


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def other_user_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def auth_headers(user_id) -> dict[str, str]:
    return {"Authorization": f"Bearer {_make_token(user_id)}"}


@pytest.fixture
async def client(session_factory, auth_headers) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def add_child(session_factory):
    async def _add_child(parent_id: uuid.UUID, **values) -> ChildModel:
        values.setdefault("first_name", "Sam")
        values.setdefault("date_of_birth", date(2017, 6, 15))
        child = ChildModel(parent_id=parent_id, **values)
        async with session_factory() as session:
            session.add(child)
            await session.commit()
        return child

    return _add_child


@pytest.fixture
def add_behavior_log(session_factory):
    async def _add_behavior_log(child: ChildModel, **values) -> BehaviorLogModel:
        values.setdefault("log_date", date.today())
        values.setdefault("mood", "calm")
        values.setdefault("energy_level", 3)
        values.setdefault("sleep_quality", 3)
        values.setdefault("behaviors_observed", [])
        log = BehaviorLogModel(child_id=child.id, parent_id=child.parent_id, **values)
        async with session_factory() as session:
            session.add(log)
            await session.commit()
        return log

    return _add_behavior_log


@pytest.fixture
def add_activity(session_factory):
    async def _add_activity(child: ChildModel, **values) -> ActivityModel:
        values.setdefault("activity_date", date.today())
        values.setdefault("activity_type", "therapy")
        values.setdefault("activity_name", "Speech therapy")
        values.setdefault("completion_status", "completed")
        activity = ActivityModel(child_id=child.id, parent_id=child.parent_id, **values)
        async with session_factory() as session:
            session.add(activity)
            await session.commit()
        return activity

    return _add_activity


@pytest.fixture
def add_recommendation(session_factory):
    async def _add_recommendation(
        child: ChildModel, **values
    ) -> RecommendationModel:
        values.setdefault("recommendation_date", date.today())
        values.setdefault("recommendation_type", "strategy")
        values.setdefault("title", "Visual schedule")
        values.setdefault("description", "Use a picture board for the morning.")
        values.setdefault("rationale", "Transitions are a recurring challenge.")
        values.setdefault("priority", "high")
        values.setdefault("status", "pending")
        recommendation = RecommendationModel(
            child_id=child.id, parent_id=child.parent_id, **values
        )
        async with session_factory() as session:
            session.add(recommendation)
            await session.commit()
        return recommendation

    return _add_recommendation


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the provider call; returns the list of captured request params."""
    calls: list[dict] = []

    def _install(content: str | dict | None = None, error: Exception | None = None):
        if isinstance(content, dict):
            content = json.dumps(content)
        if content is None and error is None:
            content = json.dumps(_analysis_payload())

        async def _acompletion(**params):
            calls.append(params)
            if error is not None:
                raise error
            return fake_completion_response(content)

        monkeypatch.setattr(litellm, "acompletion", _acompletion)
        return calls

    return _install


@pytest.fixture
def make_token():
    return _make_token


@pytest.fixture
def analysis_payload():
    return _analysis_payload
