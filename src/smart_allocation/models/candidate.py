"""Candidate data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from smart_allocation.models._coerce import coerce_to_list


class Demographics(BaseModel):
    """Demographic attributes used for representation-aware scoring."""

    model_config = ConfigDict(frozen=True)

    rural: bool = False  # Rural / under-represented flag
    category: str = "GEN"


class Candidate(BaseModel):
    """A candidate seeking placement."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    skills: list[str] = Field(default_factory=list)
    education: str | None = None
    aptitude: float = Field(default=0.0, ge=0)  # CGPA-style, 0-10
    location: str | None = None
    sectors: list[str] = Field(default_factory=list)
    demographic: Demographics = Field(default_factory=Demographics)
    preferences: list[str] = Field(default_factory=list)
    portfolio: int = Field(default=3, ge=0)

    @field_validator("skills", "sectors", "preferences", mode="before")
    @classmethod
    def coerce_to_list(cls, v: Any) -> list[str]:
        return coerce_to_list(v)

    @field_validator("demographic", mode="before")
    @classmethod
    def default_demographic(cls, v: Any) -> Any:
        return Demographics() if v is None else v

    @property
    def skill_text(self) -> str:
        """Skills joined into a single text blob."""
        return " ".join(self.skills)
