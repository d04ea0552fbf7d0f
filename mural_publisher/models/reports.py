"""Result reports for batch operations.

Batch commands contain failures per item and keep going, so their outcome
is a report rather than an exception: :class:`WalkReport` for a pass over
the submission tree and :class:`BulkOperationReport` for the two-phase
(unpublish, then delete) admin commands.  Tests assert on these instead of
on captured log output.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SubmissionFailure(BaseModel):
    """One submission directory that could not be published."""

    model_config = ConfigDict(frozen=True)

    directory: str
    error_type: str
    message: str


class WalkReport(BaseModel):
    """Outcome of one pass over the submission tree."""

    model_config = ConfigDict(frozen=True)

    root: str
    published: list[str] = Field(default_factory=list, description="Titles published in order.")
    skipped: list[str] = Field(
        default_factory=list,
        description="Directories skipped because their title was already published.",
    )
    failed: list[SubmissionFailure] = Field(default_factory=list)
    interrupted: bool = False

    @property
    def published_count(self) -> int:
        return len(self.published)


class BulkPhase(str, Enum):  # noqa: UP042
    """Phases of a bulk delete, in execution order."""

    UNPUBLISH = "unpublish"
    DELETE = "delete"


class PhaseCounts(BaseModel):
    """Per-phase tallies of a bulk operation."""

    model_config = ConfigDict(frozen=True)

    attempted: int = Field(default=0, ge=0)
    succeeded: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)


class ItemFailure(BaseModel):
    """One item that failed during one phase of a bulk operation."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    phase: BulkPhase
    message: str


class BulkOperationReport(BaseModel):
    """Outcome of a confirmed (or declined) bulk delete.

    A declined confirmation yields ``confirmed=False`` with all counts at
    zero: nothing was mutated.
    """

    model_config = ConfigDict(frozen=True)

    target: str = Field(description='Content type id, or "assets".')
    confirmed: bool
    total: int = Field(default=0, ge=0)
    unpublish: PhaseCounts = Field(default_factory=PhaseCounts)
    delete: PhaseCounts = Field(default_factory=PhaseCounts)
    failures: list[ItemFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
