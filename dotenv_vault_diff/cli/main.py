"""
Top-level CLI dispatcher: dotenv-vault-diff <command> [args...].
Commands: run (reconcile and comment), doctor (preflight checks).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .._version import __version__

logger = logging.getLogger("dotenv_vault_diff")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _fail(message: str) -> int:
    # Workflow command: marks the step failed with an annotation. Data must be %-escaped.
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    print(f"::error::{escaped}", flush=True)
    return 1


def _build_run_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("run", help="Reconcile .env.vault changes and post the PR comment")
    p.add_argument("--dry-run", action="store_true", help="Print the comment body; do not call GitHub")
    p.add_argument("--diff-file", default=None, metavar="PATH", help="Read the diff from PATH instead of running git")
    p.add_argument("--pr-number", type=int, default=None, metavar="N", help="Pull request number (default: from event payload)")
    p.add_argument("--base-ref", default=None, help="Base branch to diff against (default: GITHUB_BASE_REF)")
    p.add_argument("--vault-path", default=None, help="Vault file path (default: .env.vault)")
    p.add_argument("--repository", default=None, metavar="OWNER/REPO", help="Repository (default: GITHUB_REPOSITORY)")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default: from config)")


def _main_run(args: argparse.Namespace) -> int:
    from ..config import load_settings
    from ..core.errors import VaultDiffError
    from ..pipeline import run

    try:
        settings = load_settings(
            overrides={
                "base_ref": args.base_ref,
                "vault_path": args.vault_path,
                "repository": args.repository,
                "log_level": args.log_level,
            }
        )
    except VaultDiffError as e:
        _configure_logging("INFO")
        logger.error("%s", e)
        return _fail(str(e))
    except Exception as e:
        _configure_logging("INFO")
        logger.exception("Cannot load settings")
        return _fail(str(e) or "Cannot load settings")

    _configure_logging(settings.log_level)
    try:
        result = run(
            settings,
            dry_run=args.dry_run,
            diff_file=args.diff_file,
            pr_number=args.pr_number,
        )
    except VaultDiffError as e:
        logger.error("%s", e)
        return _fail(str(e))
    except Exception as e:
        logger.exception("Unexpected failure")
        return _fail(str(e) or "An error occurred")

    if args.dry_run:
        print(result.body)
    elif result.comment is not None:
        print(f"Comment {result.comment.action} on #{result.pull_request.number}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="dotenv-vault-diff",
        description="Summarize .env.vault version changes on a pull request",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="command")
    _build_run_parser(subparsers)
    subparsers.add_parser("doctor", help="Preflight checks for tools and secrets")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    if args.command == "run":
        return _main_run(args)
    if args.command == "doctor":
        from ..doctor import main as doctor_main

        return doctor_main()
    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
