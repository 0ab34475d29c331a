from pydantic import BaseModel

from src.academy.models.enums import NextAction, StageCode


class Stage(BaseModel):
    """Derived, never persisted: where an identity sits in onboarding."""

    code: StageCode
    next_action: NextAction | None = None
    reason: str | None = None

    model_config = {"frozen": True}
