"""FastAPI server exposing the planning pipeline for deployment."""

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from models.garments import GenderPreference
from stylist_app.app import TravelStylistApp
from stylist_app.logging_config import configure_logging


class PlanRequest(BaseModel):
    """Request payload for one free-text planning message."""

    user_id: str = Field(..., min_length=1, description="Unique user identifier")
    message: str = Field(..., description="Free-text trip or event request")


class PreferenceUpdate(BaseModel):
    gender: GenderPreference

    @field_validator("gender", mode="before")
    @classmethod
    def _parse_gender(cls, value: object) -> GenderPreference:
        return GenderPreference.parse(value)  # type: ignore[arg-type]


def create_app(stylist: TravelStylistApp | None = None) -> FastAPI:
    """Build the API around ``stylist`` (a default-configured app when omitted)."""

    configure_logging()
    stylist = stylist or TravelStylistApp()
    api = FastAPI(title="Travel Stylist", version="0.1.0")
    api.state.stylist = stylist

    @api.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "travel-stylist",
            "environment": stylist.config.environment or "local",
            "model": stylist.config.model,
            "llm_enabled": stylist.config.llm_enabled,
            "search_enabled": stylist.config.search_enabled,
        }

    @api.post("/plans")
    async def submit_plan(request: PlanRequest) -> dict:
        """Run one message through the user's session and return the settled plan."""

        plan = await stylist.submit(request.user_id, request.message)
        if plan is None:
            raise HTTPException(status_code=409, detail="Superseded by a newer request")
        return plan.to_dict()

    @api.get("/plans/{user_id}")
    async def latest_plan(user_id: str) -> dict:
        plan = stylist.session(user_id).latest_plan
        if plan is None:
            raise HTTPException(status_code=404, detail="No plan yet")
        return plan.to_dict()

    @api.get("/preferences/{user_id}")
    async def get_preference(user_id: str) -> dict:
        session = stylist.session(user_id)
        return {
            "user_id": user_id,
            "gender": session.gender.value,
            "needs_preference": session.needs_preference,
        }

    @api.put("/preferences/{user_id}")
    async def put_preference(user_id: str, update: PreferenceUpdate) -> dict:
        """Store the preference; it applies to later submissions only."""

        gender = stylist.session(user_id).set_gender(update.gender)
        return {"user_id": user_id, "gender": gender.value, "needs_preference": False}

    return api


_app: FastAPI | None = None


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers, building it on first use."""

    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str):
    # Keeps ``server.api:app`` working without building the app at import time.
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=int("8080"), reload=False)
