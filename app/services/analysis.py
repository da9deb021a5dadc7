"""AI analysis pipeline: context loading, generation and persistence.

The three steps run sequentially within one request. Generation failures
abort the request; persistence failures are logged and reported as a
boolean so the generated result can still be returned.
"""

import asyncio
from datetime import date, timedelta
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import AnalysisSchemaError, AnalysisServiceError
from app.models.activity_model import ActivityModel
from app.models.behavior_log_model import BehaviorLogModel
from app.models.child_model import ChildModel
from app.models.recommendation_model import RecommendationModel, RecommendationStatus
from app.prompts.analysis import build_analysis_context
from app.schemas.analysis import AnalysisResult, GeneratedRecommendation
from app.utils.error_handling import get_owned_or_404
from app.utils.llm import LLMMessage, LLMOutputValidationError, get_completion

logger = structlog.get_logger()


async def load_analysis_context(
    db: AsyncSession,
    child_id: UUID,
    owner_id: UUID,
    today: date | None = None,
) -> tuple[ChildModel, str]:
    """
    Load a child's recent records and render the analysis document.

    Args:
        db: Database session
        child_id: Child to analyse
        owner_id: Authenticated parent; must own the child
        today: Reference date for the trailing window and age

    Returns:
        The child row and the rendered document

    Raises:
        NotFoundError: If the child does not exist or is not owned by the caller
    """
    today = today or date.today()
    child = await get_owned_or_404(db, ChildModel, child_id, owner_id, "child")
    since = today - timedelta(days=settings.ANALYSIS_WINDOW_DAYS)

    logs_query = (
        select(BehaviorLogModel)
        .where(
            BehaviorLogModel.child_id == child_id,
            BehaviorLogModel.log_date >= since,
        )
        .order_by(BehaviorLogModel.log_date.desc())
    )
    activities_query = (
        select(ActivityModel)
        .where(
            ActivityModel.child_id == child_id,
            ActivityModel.activity_date >= since,
        )
        .order_by(ActivityModel.activity_date.desc())
    )
    behavior_logs = (await db.execute(logs_query)).scalars().all()
    activities = (await db.execute(activities_query)).scalars().all()

    logger.info(
        "Loaded analysis context",
        child_id=str(child_id),
        behavior_logs=len(behavior_logs),
        activities=len(activities),
        since=since.isoformat(),
    )

    document = build_analysis_context(child, behavior_logs, activities, today)
    return child, document


async def generate_recommendations(context: str) -> AnalysisResult:
    """
    Ask the model for recommendations and insights for a context document.

    A single attempt is made, bounded by the configured token budget and
    wall-clock timeout.

    Raises:
        AnalysisSchemaError: If the output does not match AnalysisResult
        AnalysisServiceError: On timeout, network or provider failure
    """
    try:
        response = await get_completion(
            model=settings.AI_ANALYSIS_MODEL,
            messages=[LLMMessage(role="user", content=context)],
            response_type=AnalysisResult,
            temperature=settings.AI_ANALYSIS_TEMPERATURE,
            max_tokens=settings.AI_ANALYSIS_MAX_TOKENS,
            timeout=settings.AI_ANALYSIS_TIMEOUT_SECONDS,
            max_attempts=1,
        )
    except LLMOutputValidationError as e:
        logger.error(
            "Analysis output failed schema validation",
            model=e.model,
            validation_errors=e.errors,
        )
        raise AnalysisSchemaError() from e
    except asyncio.TimeoutError as e:
        logger.error(
            "Analysis generation timed out",
            model=settings.AI_ANALYSIS_MODEL,
            timeout_seconds=settings.AI_ANALYSIS_TIMEOUT_SECONDS,
        )
        raise AnalysisServiceError() from e
    except Exception as e:
        logger.error(
            "Analysis generation failed",
            model=settings.AI_ANALYSIS_MODEL,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise AnalysisServiceError() from e

    logger.info(
        "Analysis generated",
        recommendations=len(response.content.recommendations),
        usage=response.usage,
    )
    return response.content


def to_recommendation_rows(
    recommendations: list[GeneratedRecommendation],
    child_id: UUID,
    owner_id: UUID,
    today: date,
) -> list[RecommendationModel]:
    return [
        RecommendationModel(
            child_id=child_id,
            parent_id=owner_id,
            recommendation_date=today,
            recommendation_type=rec.type.value,
            title=rec.title,
            description=rec.description,
            rationale=rec.rationale,
            priority=rec.priority.value,
            status=RecommendationStatus.PENDING.value,
        )
        for rec in recommendations
    ]


async def persist_recommendations(
    db: AsyncSession,
    recommendations: list[GeneratedRecommendation],
    child_id: UUID,
    owner_id: UUID,
    today: date | None = None,
) -> bool:
    """
    Store generated recommendations as pending rows in a single batch.

    Never raises: a failed write is rolled back and logged.

    Returns:
        True if the rows were committed, False otherwise
    """
    rows = to_recommendation_rows(
        recommendations, child_id, owner_id, today or date.today()
    )
    try:
        db.add_all(rows)
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(
            "Failed to save recommendations",
            child_id=str(child_id),
            count=len(rows),
            error=str(e),
            error_type=type(e).__name__,
        )
        return False

    logger.info("Saved recommendations", child_id=str(child_id), count=len(rows))
    return True

