"""Submission walker: drives the publishing pipeline over a template tree.

Input layout::

    <root>/
        clock-tower/
            template.txt
            front.jpg
            detail.png
        harbour-wall/
            template.txt
            ...

Each immediate subdirectory is one submission.  Submissions are processed
one at a time in name order.  A failure in one submission is logged and
recorded in the :class:`WalkReport`; the walk then moves on to the next.
Only failures before any submission starts (loading the title cache,
listing the root) abort the walk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from mural_publisher.models.mural import MuralEntry
from mural_publisher.models.reports import SubmissionFailure, WalkReport
from mural_publisher.services.context import PublishContext
from mural_publisher.services.directory_scanner import scan_submission_directory
from mural_publisher.services.publisher import MuralPublisher
from mural_publisher.services.template_parser import parse_template_file
from mural_publisher.utils.errors import MuralPublisherError, ScanError
from mural_publisher.utils.logging import get_logger


class SubmissionWalker:
    """Processes every submission directory under a root folder.

    Parameters
    ----------
    context:
        Run context shared with the publisher.
    publisher:
        Optional publisher override; built from *context* when omitted.
    """

    def __init__(self, context: PublishContext, publisher: MuralPublisher | None = None) -> None:
        self._ctx = context
        self._publisher = publisher or MuralPublisher(context)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @staticmethod
    def list_submissions(root: str | Path) -> list[Path]:
        """Return the submission directories directly under *root*, sorted.

        Hidden directories and plain files are ignored.

        Raises:
            ScanError: If *root* cannot be listed.
        """
        root_path = Path(root)
        try:
            children = list(root_path.iterdir())
        except OSError as exc:
            raise ScanError(f"Cannot list template root {root_path}: {exc}") from exc
        return sorted(
            (child for child in children if child.is_dir() and not child.name.startswith(".")),
            key=lambda child: child.name,
        )

    async def walk(
        self,
        root: str | Path,
        stop_event: asyncio.Event | None = None,
    ) -> WalkReport:
        """Publish every submission under *root*.

        Parameters
        ----------
        root:
            Folder holding one subdirectory per submission.
        stop_event:
            When set, the walk finishes the current submission and starts
            no further ones.

        Returns
        -------
        WalkReport
            Published titles, skipped duplicates and per-directory failures.
        """
        # Both of these abort the run: no submission has started yet.
        await self._ctx.title_cache.ensure_loaded(self._ctx.store)
        submissions = self.list_submissions(root)

        self._logger.info("walk_started", root=str(root), submissions=len(submissions))

        published: list[str] = []
        skipped: list[str] = []
        failed: list[SubmissionFailure] = []
        interrupted = False

        for index, directory in enumerate(submissions):
            if stop_event is not None and stop_event.is_set():
                interrupted = True
                self._logger.warning("walk_interrupted", remaining=len(submissions) - index)
                break

            try:
                entry = await self._process_one(directory)
            except MuralPublisherError as exc:
                self._logger.error(
                    "submission_failed",
                    directory=directory.name,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
                failed.append(
                    SubmissionFailure(
                        directory=directory.name,
                        error_type=type(exc).__name__,
                        message=str(exc),
                    )
                )
                continue
            except Exception as exc:
                self._logger.exception("submission_crashed", directory=directory.name)
                failed.append(
                    SubmissionFailure(
                        directory=directory.name,
                        error_type=type(exc).__name__,
                        message=str(exc),
                    )
                )
                continue

            if entry is None:
                skipped.append(directory.name)
            else:
                published.append(entry.title)

        report = WalkReport(
            root=str(root),
            published=published,
            skipped=skipped,
            failed=failed,
            interrupted=interrupted,
        )
        self._logger.info(
            "walk_finished",
            published=report.published_count,
            skipped=len(skipped),
            failed=len(failed),
            interrupted=interrupted,
        )
        return report

    async def _process_one(self, directory: Path) -> MuralEntry | None:
        """Parse, scan and publish one submission directory."""
        template = await asyncio.to_thread(
            parse_template_file, directory / self._ctx.template_filename
        )
        photos = await asyncio.to_thread(
            scan_submission_directory, directory, self._ctx.template_filename
        )
        self._logger.info(
            "submission_started",
            directory=directory.name,
            title=template.title,
            photos=len(photos),
            skipped_lines=len(template.skipped_lines),
        )
        return await self._publisher.publish(template, photos, directory)
