from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .change_record import ChangeRecord


class Unchanged(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["unchanged"] = "unchanged"


class Changed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["changed"] = "changed"
    record: ChangeRecord


class RenderFailed(BaseModel):
    """A leaf value could not be rendered, so its change is unknown."""

    model_config = ConfigDict(frozen=True)

    status: Literal["render_failed"] = "render_failed"
    label: str
    path: str
    reason: str


ValueOutcome = Unchanged | Changed | RenderFailed


class DiffReport(BaseModel):
    changes: list[ChangeRecord] = Field(default_factory=list)
    failures: list[RenderFailed] = Field(default_factory=list)
