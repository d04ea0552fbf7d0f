"""Parsed template model.

A submission's ``template.txt`` becomes one :class:`ParsedTemplate`.  The
parser is lenient, so besides the recognised fields the model also keeps
every non-blank line that did not match the ``name-value-`` pattern; a
caller that wants strict behaviour can reject the template when
``skipped_lines`` is non-empty.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mural_publisher.utils.text_normalizer import normalize_field_name


class ParsedTemplate(BaseModel):
    """Fields parsed from one submission template.

    Field names are stored in their canonical lower-case spelling (see
    :func:`~mural_publisher.utils.text_normalizer.normalize_field_name`);
    :meth:`get` applies the same normalisation to the lookup key, so
    ``template.get("Title")`` and ``template.get("title")`` agree.
    """

    model_config = ConfigDict(frozen=True)

    source_path: str = Field(description="Path of the template file this was parsed from.")
    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Canonical field name -> trimmed value.",
    )
    skipped_lines: list[str] = Field(
        default_factory=list,
        description="Non-blank lines that did not match the template pattern.",
    )

    def get(self, name: str, default: str = "") -> str:
        """Return the value of field *name*, or *default* when absent."""
        return self.fields.get(normalize_field_name(name), default)

    @property
    def title(self) -> str:
        return self.get("title").strip()

    @property
    def is_clean(self) -> bool:
        """True when every non-blank line matched the template pattern."""
        return not self.skipped_lines
