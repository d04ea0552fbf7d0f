"""Photo discovery inside one submission directory."""

from __future__ import annotations

from pathlib import Path

from mural_publisher.utils.errors import ScanError

DEFAULT_TEMPLATE_FILENAME = "template.txt"


def scan_submission_directory(
    path: str | Path,
    template_filename: str = DEFAULT_TEMPLATE_FILENAME,
) -> list[str]:
    """Return candidate photo file names in a submission directory.

    Excludes the template file, hidden names (leading ``.``) and
    subdirectories.  Extensions are not checked here; the publisher
    rejects unsupported files at upload time.  Names are sorted so scan
    order, and with it the order of the entry's photos, is reproducible.

    Raises:
        ScanError: If the directory cannot be listed.
    """
    dir_path = Path(path)
    try:
        children = list(dir_path.iterdir())
    except OSError as exc:
        raise ScanError(f"Cannot list submission directory {dir_path}: {exc}") from exc

    return sorted(
        child.name
        for child in children
        if child.name != template_filename
        and not child.name.startswith(".")
        and not child.is_dir()
    )
