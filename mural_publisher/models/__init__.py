"""Pydantic v2 data models for the mural publisher.

All models are frozen; updated copies are produced with
``model_copy(update={...})``.

- **template** -- ``ParsedTemplate``: fields and unmatched lines of one
  ``template.txt``.
- **mural** -- ``MuralEntry`` and ``AssetLink``: the record published per
  submission and its photo references.
- **remote** -- views over content-store payloads: entries, assets,
  content-type schemas, and the API smoke-test result.
- **reports** -- ``WalkReport`` and ``BulkOperationReport`` returned by
  batch commands.
"""

from mural_publisher.models.mural import AssetLink, MuralEntry
from mural_publisher.models.remote import (
    ApiCheckResult,
    ContentTypeField,
    ContentTypeSchema,
    ContentTypeSnapshot,
    RemoteAsset,
    RemoteEntry,
)
from mural_publisher.models.reports import (
    BulkOperationReport,
    BulkPhase,
    ItemFailure,
    PhaseCounts,
    SubmissionFailure,
    WalkReport,
)
from mural_publisher.models.template import ParsedTemplate

__all__ = [
    "ApiCheckResult",
    "AssetLink",
    "BulkOperationReport",
    "BulkPhase",
    "ContentTypeField",
    "ContentTypeSchema",
    "ContentTypeSnapshot",
    "ItemFailure",
    "MuralEntry",
    "ParsedTemplate",
    "PhaseCounts",
    "RemoteAsset",
    "RemoteEntry",
    "SubmissionFailure",
    "WalkReport",
]
