"""SyncResult model for backend round-trips."""

from typing import Literal

from pydantic import BaseModel, Field

from quickclass.models.class_entry import ClassEntry


class SyncResult(BaseModel):
    """Outcome of a save or batch-import round-trip.

    Network operations report failures through this model instead of
    raising, so callers branch on ``success``.
    """

    action: Literal["save", "import"] = Field(
        ...,
        description="Which round-trip produced this result"
    )

    success: bool = Field(
        ...,
        description="Whether the backend accepted the request"
    )

    message: str = Field(
        default="",
        description="Backend message on success, error detail on failure"
    )

    classes: list[ClassEntry] = Field(
        default_factory=list,
        description="Canonical list returned by the backend (empty on failure)"
    )

    model_config = {"frozen": True}
