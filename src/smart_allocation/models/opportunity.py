"""Opportunity data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from smart_allocation.models._coerce import coerce_to_list


class Opportunity(BaseModel):
    """A capacity-limited placement opportunity.

    Capacity is deliberately unconstrained here: opportunities with a
    capacity below 1 are excluded by the allocator rather than rejected.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    organization: str = ""
    role: str = ""
    location: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    capacity: int = 1
    sector: str | None = None

    @field_validator("required_skills", mode="before")
    @classmethod
    def coerce_to_list(cls, v: Any) -> list[str]:
        return coerce_to_list(v)

    @field_validator("sector", mode="before")
    @classmethod
    def blank_sector_is_none(cls, v: Any) -> str | None:
        """Treat blank sector strings as no sector declared."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def skill_text(self) -> str:
        """Required skills joined into a single text blob."""
        return " ".join(self.required_skills)
