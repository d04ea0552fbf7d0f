# =============================================================================
# mural_publisher/cli/murals.py — Mural Publisher CLI
# =============================================================================
#
# Operator entry point for publishing mural submissions to Contentful and
# for inspecting or clearing remote content.
#
# Supported subcommands:
#
#   trigger       — Report every content type with its fields and entries
#   pt            — Process the template tree and publish new murals
#   checkApi      — Connectivity and schema smoke test
#   delete        — Unpublish and delete every entry of one content type
#   deleteAssets  — Unpublish and delete every asset
#   types         — List content types
#   fields        — List the fields of one content type
#
# Exit codes:
#   0 — finished (per-submission failures are reported, not fatal), or
#       interrupted with Ctrl-C
#   1 — configuration error, fatal command error, or unexpected exception
#   2 — unknown subcommand / bad arguments (argparse)
#
# Usage examples:
#   mural-publisher pt --path ./contentfull_data_post
#   mural-publisher delete mural
#   mural-publisher deleteAssets --yes
# =============================================================================

"""Command-line interface for the mural publisher.

Usage::

    mural-publisher pt [--path DIR]
    mural-publisher trigger
    mural-publisher checkApi
    mural-publisher delete <content-type> [--yes]
    mural-publisher deleteAssets [--yes]
    mural-publisher types
    mural-publisher fields <content-type>

Credentials come from CONTENTFUL_MANAGEMENT_TOKEN and CONTENTFUL_SPACE_ID
(environment or ``.env``).
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import signal
import sys
from collections.abc import Callable
from typing import Any

from mural_publisher.config.loader import load_config
from mural_publisher.config.settings import Settings
from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.models.reports import BulkOperationReport, WalkReport
from mural_publisher.services.admin_service import AdminService
from mural_publisher.utils.errors import MuralPublisherError
from mural_publisher.utils.logging import configure_logging, get_logger

_DEFAULT_CONFIG_PATH = "config/config.yaml"


def confirm_prompt(prompt: str, input_fn: Callable[[str], str] = input) -> bool:
    """Ask a yes/no question on the terminal; anything but y/yes is a no."""
    try:
        answer = input_fn(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _confirm_for(args: argparse.Namespace) -> Callable[[str], bool]:
    if getattr(args, "yes", False):
        return lambda _prompt: True
    return confirm_prompt


# ---------------------------------------------------------------------------
# Report printers
# ---------------------------------------------------------------------------


def _print_walk_report(report: WalkReport) -> None:
    print("\nTemplate processing complete:")
    print(f"  Root:        {report.root}")
    print(f"  Published:   {report.published_count}")
    for title in report.published:
        print(f"    + {title}")
    print(f"  Skipped:     {len(report.skipped)} (title already published)")
    for directory in report.skipped:
        print(f"    = {directory}")
    print(f"  Failed:      {len(report.failed)}")
    for failure in report.failed:
        print(f"    ! {failure.directory}: [{failure.error_type}] {failure.message}")
    if report.interrupted:
        print("  Interrupted: remaining submissions were not started")


def _print_bulk_report(report: BulkOperationReport) -> None:
    if not report.confirmed:
        print("  Aborted.")
        return
    print(f"\nBulk delete of '{report.target}' complete:")
    print(f"  Items:       {report.total}")
    print(
        f"  Unpublished: {report.unpublish.succeeded}/{report.unpublish.attempted}"
        f" ({report.unpublish.failed} failed)"
    )
    print(
        f"  Deleted:     {report.delete.succeeded}/{report.delete.attempted}"
        f" ({report.delete.failed} failed)"
    )
    for failure in report.failures:
        print(f"    ! {failure.phase.value} {failure.item_id}: {failure.message}")


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_trigger(admin: AdminService) -> int:
    """Report every content type, its fields, and every entry's raw fields."""
    snapshots = await admin.fetch_all_content()
    for content_type_id, snapshot in snapshots.items():
        name = snapshot.content_type.name or content_type_id
        print(f"\n=== {name} (ID: {content_type_id}) ===")
        for field in snapshot.content_type.fields:
            print(f"  field {field.id:<20} {field.name:<25} {field.type}")
        print(f"  {len(snapshot.entries)} entries")
        for entry_fields in snapshot.entries:
            print(json.dumps(entry_fields, indent=2, ensure_ascii=False))
    return 0


async def _handle_pt(
    args: argparse.Namespace, config: dict[str, Any], store: IContentStoreProvider
) -> int:
    """Publish every submission under the template root."""
    from mural_publisher.main import build_publish_context
    from mural_publisher.services.submission_walker import SubmissionWalker

    root = args.path or config["publishing"]["templates_dir"]
    print(f"Processing templates in: {root}")

    context = build_publish_context(config, store)
    walker = SubmissionWalker(context)

    # First Ctrl-C: finish the current submission, then stop.  The handler
    # removes itself, so a second Ctrl-C interrupts immediately.
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _request_stop() -> None:
        print("\nStopping after the current submission (Ctrl-C again to abort)...", file=sys.stderr)
        stop_event.set()
        loop.remove_signal_handler(signal.SIGINT)

    with contextlib.suppress(NotImplementedError, RuntimeError):
        loop.add_signal_handler(signal.SIGINT, _request_stop)

    try:
        report = await walker.walk(root, stop_event=stop_event)
    finally:
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.remove_signal_handler(signal.SIGINT)
    _print_walk_report(report)
    print(f"\nProcessed {report.published_count} submission(s)")
    return 0


async def _handle_check_api(admin: AdminService) -> int:
    """Connect, print the API base URL and space, and count content types."""
    result = await admin.check_api()
    print("API check:")
    print(f"  API base URL:   {result.base_url}")
    print(f"  Space:          {result.space_name} (ID: {result.space_id})")
    print(f"  Environment:    {result.environment}")
    print(f"  Content types:  {result.content_type_count}")
    return 0


async def _handle_types(admin: AdminService) -> int:
    """List content types with their fields."""
    content_types = await admin.list_content_types()
    print("Available Content Types:")
    for content_type in content_types:
        print(f"- {content_type.name} (ID: {content_type.id})")
        for field in content_type.fields:
            print(f"    - {field.name} ({field.type})")
    return 0


async def _handle_fields(args: argparse.Namespace, admin: AdminService) -> int:
    """List the fields of one content type."""
    fields = await admin.get_content_type_fields(args.content_type)
    print(f"Fields for Content Type: {args.content_type}")
    for field in fields:
        print(f"- {field.name} ({field.type})")
    return 0


async def _handle_delete(args: argparse.Namespace, admin: AdminService) -> int:
    """Bulk-delete every entry of one content type."""
    print(f"Deleting all entries of content type '{args.content_type}'")
    report = await admin.delete_entries(args.content_type, confirm=_confirm_for(args))
    _print_bulk_report(report)
    return 0


async def _handle_delete_assets(args: argparse.Namespace, admin: AdminService) -> int:
    """Bulk-delete every asset."""
    print("Deleting all assets")
    report = await admin.delete_assets(confirm=_confirm_for(args))
    _print_bulk_report(report)
    return 0


async def _run(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Open the content store, dispatch one subcommand, close the store."""
    from mural_publisher.main import build_admin_service, build_content_store

    store = build_content_store(config)
    try:
        if args.command == "pt":
            return await _handle_pt(args, config, store)

        admin = build_admin_service(config, store)
        if args.command == "trigger":
            return await _handle_trigger(admin)
        if args.command == "checkApi":
            return await _handle_check_api(admin)
        if args.command == "types":
            return await _handle_types(admin)
        if args.command == "fields":
            return await _handle_fields(args, admin)
        if args.command == "delete":
            return await _handle_delete(args, admin)
        if args.command == "deleteAssets":
            return await _handle_delete_assets(args, admin)
        return 1
    finally:
        await store.close()


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the mural publisher CLI."""
    parser = argparse.ArgumentParser(
        prog="mural-publisher",
        description="Publish mural submissions to Contentful and manage remote content.",
    )
    parser.add_argument(
        "--config",
        default=_DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML config file (default: {_DEFAULT_CONFIG_PATH})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("trigger", help="Report existing content for every content type")

    pt_parser = subparsers.add_parser("pt", help="Process the template tree and publish new murals")
    pt_parser.add_argument(
        "--path",
        default=None,
        help="Template root directory (default: MURAL_TEMPLATES_DIR, else publishing.templates_dir)",
    )

    subparsers.add_parser("checkApi", help="Check connectivity and read the schema list")
    subparsers.add_parser("types", help="List content types")

    fields_parser = subparsers.add_parser("fields", help="List the fields of a content type")
    fields_parser.add_argument("content_type", help="Content type id (e.g. mural)")

    delete_parser = subparsers.add_parser(
        "delete", help="Unpublish and delete every entry of a content type"
    )
    delete_parser.add_argument("content_type", help="Content type id (e.g. mural)")
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation prompt")

    assets_parser = subparsers.add_parser("deleteAssets", help="Unpublish and delete every asset")
    assets_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation prompt")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses the subcommand, loads settings and configuration, then runs the
    handler on a fresh event loop and exits with its status.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    app_settings = Settings()
    configure_logging(app_settings.log_level)
    logger = get_logger(__name__)

    try:
        app_settings.require_credentials()
        config = load_config(args.config, settings=app_settings)
        exit_code = asyncio.run(_run(args, config))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 0
    except MuralPublisherError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1
    except Exception as exc:
        logger.exception("fatal_error", command=args.command, error=str(exc))
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
