#!/usr/bin/env python3
"""Validate draft files and optionally submit them.

Each draft file holds one channel or template (see
``studio.core.draft_loader``). The script prints every validation error
and exits non-zero when any draft is invalid. Video templates also get a
generation-readiness check, which never changes the exit code.

Usage:
    # Validate one file
    python scripts/validate_draft.py drafts/midnight_tales.yaml

    # Validate every draft in the configured drafts directory
    python scripts/validate_draft.py

    # Validate, then create/update valid drafts on the REST service
    python scripts/validate_draft.py drafts/midnight_tales.yaml --submit
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from studio.config.base import EntityKind
from studio.core.draft_loader import list_draft_files, load_draft_file
from studio.core.exceptions import StudioError
from studio.core.logging import get_logger, setup_logging
from studio.infrastructure.console_api import ConsoleAPIClient
from studio.infrastructure.http_client import HTTPClient
from studio.services.draft import EntityDraft
from studio.services.submission import SubmissionService

setup_logging()
logger = get_logger(__name__)


def print_report(path: Path, draft: EntityDraft) -> bool:
    """Print a draft's validation report.

    Returns:
        True if the draft is valid
    """
    report = draft.validate()
    status = "OK" if report.is_valid else f"{len(report.errors)} error(s)"
    print(f"{path} [{report.kind.value}]: {status}")
    for error in report.errors:
        where = error.field or "(form)"
        print(f"   - {where}: {error.message} [{error.kind.value}]")
    if draft.kind is EntityKind.VIDEO_TEMPLATE:
        print_readiness(draft)
    return report.is_valid


def print_readiness(draft: EntityDraft) -> None:
    """Print readiness errors and warnings of a video template draft."""
    readiness = draft.readiness()
    print(f"   readiness: {'ready' if readiness.is_ready else 'not ready'}")
    for error in readiness.errors:
        print(f"   - {error.field}: {error.message}")
    for warning in readiness.warnings:
        print(f"   ! {warning.field}: {warning.message}")


def report_dict(draft: EntityDraft) -> dict[str, Any]:
    report = draft.validate().to_dict()
    if draft.kind is EntityKind.VIDEO_TEMPLATE:
        report["readiness"] = draft.readiness().to_dict()
    return report


async def submit_drafts(drafts: list[tuple[Path, EntityDraft]]) -> None:
    async with HTTPClient.from_config() as http:
        service = SubmissionService(ConsoleAPIClient(http))
        for path, draft in drafts:
            saved = await service.submit(draft)
            print(f"{path}: saved as {draft.kind.value} id={saved.get('id')}")


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Validate channel and template draft files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Draft files (default: every draft in DRAFTS_DIRECTORY)",
    )
    parser.add_argument(
        "--submit",
        action="store_true",
        help="Create or update valid drafts on the REST service",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print reports as JSON",
    )
    args = parser.parse_args()

    try:
        paths = args.paths or list_draft_files()
        drafts = [(path, EntityDraft(*load_draft_file(path))) for path in paths]
    except StudioError as e:
        logger.error("Could not load drafts", **e.to_dict())
        sys.exit(2)

    if args.json:
        reports = {str(path): report_dict(draft) for path, draft in drafts}
        print(json.dumps(reports, indent=2))
        all_valid = all(report["valid"] for report in reports.values())
    else:
        all_valid = all([print_report(path, draft) for path, draft in drafts])

    if not all_valid:
        sys.exit(1)

    if args.submit:
        try:
            asyncio.run(submit_drafts(drafts))
        except StudioError as e:
            logger.error("Submission failed", **e.to_dict())
            sys.exit(1)


if __name__ == "__main__":
    main()
