"""
Vote model — one forced-choice answer. Consumed by the update it triggers, never stored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .item import coerce_id


class Vote(BaseModel):
    """The item the user picked and the one they passed on."""

    winner_id: str = Field(alias="winnerId")
    loser_id: str = Field(alias="loserId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("winner_id", "loser_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return coerce_id(v)
