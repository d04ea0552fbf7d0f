"""Text normalization utilities for template field names and entry slugs.

Two concerns live here:

1. **Field-name canonicalisation** -- template authors write ``Title``,
   ``title`` or ``  TITLE `` interchangeably; every lookup goes through
   :func:`normalize_field_name` so parsing and entry assembly agree on one
   (lower-case) spelling.

2. **Slug derivation** -- the entry's URL field is derived from its title,
   never supplied by the template.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9-]")
_REPEATED_HYPHEN_RE = re.compile(r"-{2,}")


def normalize_field_name(name: str) -> str:
    """Return the canonical spelling of a template field name.

    Trims surrounding whitespace, collapses inner whitespace runs to a
    single space and lower-cases the result, so ``" Title "`` and
    ``"TITLE"`` both become ``"title"``.

    Args:
        name: Raw field name as written in the template.

    Returns:
        Canonical field name.
    """
    return _WHITESPACE_RE.sub(" ", name.strip()).lower()


def slugify(title: str) -> str:
    """Derive a URL slug from an entry title.

    Lower-cases the title, replaces whitespace runs with a single hyphen,
    drops every character outside ``[a-z0-9-]``, collapses repeated
    hyphens and trims hyphens from both ends.

    >>> slugify("Old Town Mural!!")
    'old-town-mural'
    >>> slugify("  Multi   Space  ")
    'multi-space'

    Args:
        title: Entry title.

    Returns:
        The slug; empty when the title has no usable characters.
    """
    slug = _WHITESPACE_RE.sub("-", title.lower())
    slug = _SLUG_INVALID_RE.sub("", slug)
    slug = _REPEATED_HYPHEN_RE.sub("-", slug)
    return slug.strip("-")
