"""Parser for submission ``template.txt`` files.

Template format: UTF-8 text, one field per line, written as
``<name>-<value>-``::

    Title - Clock Tower -
    Location - 12 Market Street -
    Description - Painted in 1998 by the old-town collective -
    Category - Historic -

The field name is everything before the first hyphen, the value everything
between that hyphen and the trailing one; both are trimmed, so hyphens
inside the value survive.  Blank lines are ignored.  Other lines that do
not fit the pattern are skipped without failing the parse and reported in
:attr:`ParsedTemplate.skipped_lines`; pass ``strict=True`` to turn them
into a :class:`ParseError` instead.
"""

from __future__ import annotations

import re
from pathlib import Path

from mural_publisher.models.template import ParsedTemplate
from mural_publisher.utils.errors import ParseError
from mural_publisher.utils.logging import get_logger
from mural_publisher.utils.text_normalizer import normalize_field_name

_LINE_RE = re.compile(r"^(.*?)-\s*(.*?)-$")


def parse_template_text(text: str, source_path: str = "", strict: bool = False) -> ParsedTemplate:
    """Parse template *text* into a :class:`ParsedTemplate`.

    Args:
        text: Full template contents.
        source_path: Path reported in the result and in errors.
        strict: Raise instead of skipping lines that do not match.

    Returns:
        The parsed template.  Empty text yields an empty mapping.

    Raises:
        ParseError: Only in strict mode, naming the first unmatched line.
    """
    fields: dict[str, str] = {}
    skipped: list[str] = []

    for line in text.splitlines():
        stripped = line.rstrip()
        if not stripped.strip():
            continue
        match = _LINE_RE.match(stripped)
        name = normalize_field_name(match.group(1)) if match else ""
        if not name:
            skipped.append(stripped)
            continue
        # A repeated field name overrides the earlier value.
        fields[name] = match.group(2).strip()

    if skipped:
        if strict:
            raise ParseError(f"{source_path or '<text>'}: unrecognised line {skipped[0]!r}")
        get_logger(__name__).debug("template_lines_skipped", path=source_path, count=len(skipped))

    return ParsedTemplate(source_path=source_path, fields=fields, skipped_lines=skipped)


def parse_template_file(path: str | Path, strict: bool = False) -> ParsedTemplate:
    """Read and parse one template file.

    Raises:
        ParseError: If the file cannot be read or decoded as UTF-8, or, in
            strict mode, if any non-blank line does not match.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Cannot read template {file_path}: {exc}") from exc
    return parse_template_text(text, source_path=str(file_path), strict=strict)
