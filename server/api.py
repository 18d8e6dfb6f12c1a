"""FastAPI adapter exposing the recommendation engine to a calling application."""

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError

from logic.validation import FeedbackPayload, RecommendationOptions, RequestContextPayload, validation_failure
from models.style_profile import StyleProfile
from stylist_app.engine import RecommendationEngine, recommendation_to_dict
from stylist_app.logging_config import configure_logging

configure_logging()

engine = RecommendationEngine()
app = FastAPI(title="Outfit Recommendation Engine", version="0.1.0")


class StyleProfilePayload(BaseModel):
    preferred_style: str = ""
    favorite_colors: List[str] = []
    color_palette_colors: List[str] = []
    goals: List[str] = []


class RecommendationRequest(BaseModel):
    """Request payload for one recommendation run."""

    items: List[Dict[str, Any]] = Field(..., description="Wardrobe items as produced by the tagging pipeline")
    context: RequestContextPayload
    profile: StyleProfilePayload = StyleProfilePayload()
    options: RecommendationOptions = RecommendationOptions()
    user_id: str | None = Field(None, description="Enables feedback-aware filtering")


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness check."""

    return {
        "status": "ok",
        "service": "outfit-recommendation-engine",
        "environment": engine.config.environment or "local",
        "filter_mode": engine.config.filter_mode.value,
    }


@app.post("/recommendations")
async def recommend(request: RecommendationRequest) -> dict:
    """Run filter, generation, scoring and selection for the supplied wardrobe."""

    try:
        recommendations = engine.recommend(
            request.items,
            StyleProfile(**request.profile.model_dump()),
            request.context,
            request.options,
            user_id=request.user_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"status": "ok", "recommendations": [recommendation_to_dict(rec) for rec in recommendations]}


@app.post("/users/{user_id}/feedback")
async def add_feedback(user_id: str, payload: Dict[str, Any]) -> dict:
    """Record an outfit rating and return the updated preferences."""

    try:
        feedback = FeedbackPayload.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=validation_failure("Invalid feedback", exc))
    try:
        preferences = engine.add_feedback(user_id, feedback)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"status": "ok", "preferences": asdict(preferences)}


@app.get("/users/{user_id}/preferences")
async def get_preferences(user_id: str) -> dict:
    try:
        preferences = engine.get_preferences(user_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"status": "ok", "preferences": asdict(preferences)}


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
