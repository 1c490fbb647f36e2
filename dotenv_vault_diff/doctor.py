"""
Preflight checks for env, deps, tools and secrets.
Run: python -m dotenv_vault_diff doctor
Exit: 0 all OK, 2 something missing.
"""
from __future__ import annotations

import os
import shutil
from typing import Callable, List, Optional

from .config import Settings, load_settings
from .core.errors import ConfigurationError

DEPENDENCIES = ["requests", "yaml"]


def check_dependencies() -> bool:
    """Return True if all required packages import; else print pip install and return False."""
    missing = []
    for pkg in DEPENDENCIES:
        try:
            __import__(pkg)
        except ImportError:
            missing.append(pkg)
    if not missing:
        print("[OK] dependencies  " + " ".join(DEPENDENCIES))
        return True
    print("[FAIL] Missing packages: " + ", ".join(missing))
    print("  Fix: python -m pip install -e .")
    return False


def check_git(which: Callable[[str], Optional[str]] = shutil.which) -> bool:
    path = which("git")
    if path:
        print(f"[OK] git  {path}")
        return True
    print("[FAIL] git not found on PATH")
    return False


def check_vault_command(settings: Settings, which: Callable[[str], Optional[str]] = shutil.which) -> bool:
    exe = settings.vault_command[0]
    path = which(exe)
    if path:
        print(f"[OK] vault command  {' '.join(settings.vault_command)}")
        return True
    print(f"[FAIL] vault command not found: {exe}")
    print("  Fix: install Node.js (for npx) or set vault.command / VAULT_DIFF_VAULT_COMMAND")
    return False


def check_vault_file(settings: Settings) -> bool:
    """Informational: a missing vault file just means there is nothing to diff."""
    if os.path.isfile(settings.vault_path):
        print(f"[OK] vault file  {settings.vault_path}")
    else:
        print(f"[WARN] vault file not found: {settings.vault_path}")
    return True


def check_secrets(settings: Settings) -> bool:
    try:
        settings.require_secrets(need_token=True)
    except ConfigurationError as e:
        print(f"[FAIL] {e}")
        return False
    print(f"[OK] secrets  token and DOTENV_ME present for {settings.repository}")
    return True


def check_event(settings: Settings) -> bool:
    if settings.event_path and os.path.isfile(settings.event_path):
        print(f"[OK] event payload  {settings.event_path}")
        return True
    print("[WARN] no event payload (GITHUB_EVENT_PATH); run needs --pr-number")
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Run all checks; return 0 OK, 2 if any check failed."""
    print("dotenv-vault-diff doctor")
    print("-" * 40)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"[FAIL] config  {e}")
        return 2
    except Exception as e:
        print(f"[FAIL] config  unexpected error: {e!r}")
        return 2
    results = [
        check_dependencies(),
        check_git(),
        check_vault_command(settings),
        check_vault_file(settings),
        check_secrets(settings),
        check_event(settings),
    ]
    print("-" * 40)
    if all(results):
        print("All checks passed.")
        return 0
    print("Some checks failed.")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
