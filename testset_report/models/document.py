"""Schema of JSON documents describing a raw result tree."""

from collections.abc import Sequence
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import Field, NonNegativeFloat

from testset_report.models.base import Model
from testset_report.models.outcome import OutcomeKind

ChildTag = Field(discriminator="type")


class OutcomeDocument(Model):
    """A single test outcome."""

    type: Literal["outcome"] = "outcome"
    kind: OutcomeKind = Field(..., description="pass, fail, broken or error")
    expression: str | None = Field(default=None, description="Tested expression")
    message: str | None = Field(default=None, description="Failure diagnostics")
    source: str | None = Field(default=None, description="File and line of the test")
    backtrace: str | None = None
    duration: NonNegativeFloat | None = Field(
        default=None, description="Seconds attributed to the test"
    )


class GroupDocument(Model):
    """A named group of outcomes and nested groups."""

    type: Literal["group"] = "group"
    description: str = Field(..., description="Group name")
    reporting: bool = Field(
        default=True, description="Whether the group carries reporting metadata"
    )
    properties: dict[str, Any] = Field(default_factory=dict)
    start_time: datetime | None = None
    elapsed: NonNegativeFloat | None = Field(
        default=None, description="Seconds taken by the whole group"
    )
    hostname: str | None = None
    children: "Sequence[Annotated[OutcomeDocument | GroupDocument, ChildTag]]" = Field(
        default_factory=list
    )


GroupDocument.model_rebuild()
