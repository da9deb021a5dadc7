from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.recommendation_model import Priority, RecommendationType

MIN_RECOMMENDATIONS = 4
MAX_RECOMMENDATIONS = 6


class AnalyzeRequest(BaseModel):
    """Request body for the analysis endpoint.

    ``childId`` is kept optional here so a missing id is reported as a
    400 by the endpoint rather than a schema error.
    """

    child_id: Optional[str] = Field(None, alias="childId")

    model_config = ConfigDict(populate_by_name=True)


class GeneratedRecommendation(BaseModel):
    type: RecommendationType
    title: str = Field(
        ..., description="Clear, actionable title for the recommendation"
    )
    description: str = Field(
        ..., description="Detailed explanation of the recommendation"
    )
    rationale: str = Field(
        ..., description="Why this is recommended based on the data patterns"
    )
    priority: Priority


class AnalysisInsights(BaseModel):
    behaviorPatterns: list[str] = Field(
        ..., description="Key behavior patterns identified"
    )
    triggerAnalysis: str = Field(..., description="Analysis of common triggers")
    progressSummary: str = Field(
        ..., description="Summary of progress and positive trends"
    )
    areasOfConcern: list[str] = Field(..., description="Areas that need attention")


class AnalysisResult(BaseModel):
    """Structured output the model must produce for an analysis request"""

    recommendations: list[GeneratedRecommendation] = Field(
        ..., min_length=MIN_RECOMMENDATIONS, max_length=MAX_RECOMMENDATIONS
    )
    insights: AnalysisInsights


class AnalyzeResponse(AnalysisResult):
    success: bool = True
