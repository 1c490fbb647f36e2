"""
Load config from vault_diff.yaml with optional env overrides.
Single source of truth for vault path, CLI command, timeouts, comment identity.

Secrets (GitHub token, DOTENV_ME) never live in YAML; load_settings() reads them
from the environment and returns them in an explicit Settings value.
"""
from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .core.errors import ConfigurationError

CONFIG_ENV_VAR = "VAULT_DIFF_CONFIG"
DEFAULT_CONFIG_FILENAME = "vault_diff.yaml"

# Defaults if no YAML or env
_DEFAULTS = {
    "vault": {
        "path": ".env.vault",
        "command": ["npx", "dotenv-vault@latest"],
        "timeout_s": 60.0,
        "max_retries": 2,
        "max_workers": 4,
    },
    "git": {"remote": "origin", "timeout_s": 60.0},
    "github": {
        "api_url": "https://api.github.com",
        "timeout_s": 30.0,
        "max_retries": 3,
    },
    "comment": {
        "header": "Dotenv-vault Diff",
        "bot_login": "github-actions[bot]",
    },
    "logging": {"level": "INFO"},
}

# Action inputs arrive as INPUT_<NAME>, with the hyphen kept.
_TOKEN_ENV_VARS = ("INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN")
_DOTENV_ME_ENV_VARS = ("INPUT_DOTENV-ME", "INPUT_DOTENV_ME", "DOTENV_ME")


def _config_yaml_path(environ: Mapping[str, str]) -> Path:
    """Explicit $VAULT_DIFF_CONFIG, else vault_diff.yaml in the working directory."""
    explicit = environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def _load_yaml(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides(environ: Mapping[str, str]) -> dict:
    overrides: dict = {}
    path = environ.get("VAULT_DIFF_VAULT_PATH")
    if path:
        overrides.setdefault("vault", {})["path"] = path
    command = environ.get("VAULT_DIFF_VAULT_COMMAND")
    if command:
        overrides.setdefault("vault", {})["command"] = shlex.split(command)
    level = environ.get("VAULT_DIFF_LOG_LEVEL")
    if level:
        overrides.setdefault("logging", {})["level"] = level
    api_url = environ.get("GITHUB_API_URL")
    if api_url:
        overrides.setdefault("github", {})["api_url"] = api_url
    return overrides


def get_config(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Return merged config: defaults <- vault_diff.yaml <- env."""
    env = os.environ if environ is None else environ
    merged = _deep_merge(_DEFAULTS, _load_yaml(_config_yaml_path(env)))
    merged = _deep_merge(merged, _env_overrides(env))
    return merged


def _first_env(environ: Mapping[str, str], names: Tuple[str, ...]) -> str:
    for name in names:
        value = environ.get(name)
        if value and value.strip():
            return value.strip()
    return ""


def _command_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return shlex.split(value)
    if isinstance(value, (list, tuple)) and value:
        return [str(v) for v in value]
    raise ConfigurationError(f"vault.command must be a string or non-empty list, got {value!r}")


@dataclass(frozen=True, repr=False)
class Settings:
    """Everything one run needs, resolved up front and treated as read-only afterwards."""

    repository: str
    github_token: str
    dotenv_me: str
    vault_path: str
    vault_command: Tuple[str, ...]
    vault_timeout_s: float
    vault_max_retries: int
    max_workers: int
    git_remote: str
    git_timeout_s: float
    github_api_url: str
    github_timeout_s: float
    github_max_retries: int
    comment_header: str
    bot_login: str
    base_ref: str = ""
    event_path: str = ""
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # The header is how the existing summary comment is found again.
        if not self.comment_header.strip():
            raise ConfigurationError("comment.header must not be blank")

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        return (
            f"Settings(repository={self.repository!r}, vault_path={self.vault_path!r}, "
            f"base_ref={self.base_ref!r}, github_token={'***' if self.github_token else ''!r}, "
            f"dotenv_me={'***' if self.dotenv_me else ''!r})"
        )

    def owner_repo(self) -> Tuple[str, str]:
        owner, _, repo = self.repository.partition("/")
        if not owner or not repo:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like 'owner/repo', got {self.repository!r}"
            )
        return owner, repo

    def require_secrets(self, *, need_token: bool = True) -> None:
        """Raise ConfigurationError with an actionable message if required secrets are missing."""
        if not self.dotenv_me:
            raise ConfigurationError(
                "DOTENV_ME is not set. Pass the 'dotenv-me' input or set DOTENV_ME."
            )
        if need_token:
            if not self.github_token:
                raise ConfigurationError(
                    "GitHub token is not set. Pass the 'github-token' input or set GITHUB_TOKEN."
                )
            self.owner_repo()


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """
    Build Settings from config (defaults <- YAML <- env) plus secrets from the environment.

    `overrides` holds CLI flag values; None entries are ignored.
    """
    env = os.environ if environ is None else environ
    cfg = get_config(env)
    extra = {k: v for k, v in (overrides or {}).items() if v is not None}

    vault = cfg["vault"]
    git = cfg["git"]
    github = cfg["github"]
    comment = cfg["comment"]
    try:
        return Settings(
            repository=str(extra.get("repository") or env.get("GITHUB_REPOSITORY", "")),
            github_token=str(extra.get("github_token") or _first_env(env, _TOKEN_ENV_VARS)),
            dotenv_me=str(extra.get("dotenv_me") or _first_env(env, _DOTENV_ME_ENV_VARS)),
            vault_path=str(extra.get("vault_path") or vault["path"]),
            vault_command=tuple(_command_list(vault["command"])),
            vault_timeout_s=float(vault["timeout_s"]),
            vault_max_retries=max(1, int(vault["max_retries"])),
            max_workers=max(1, int(vault["max_workers"])),
            git_remote=str(git["remote"]),
            git_timeout_s=float(git["timeout_s"]),
            github_api_url=str(github["api_url"]).rstrip("/"),
            github_timeout_s=float(github["timeout_s"]),
            github_max_retries=max(1, int(github["max_retries"])),
            comment_header=str(comment["header"] or ""),
            bot_login=str(comment["bot_login"]),
            base_ref=str(extra.get("base_ref") or env.get("GITHUB_BASE_REF", "")),
            event_path=str(env.get("GITHUB_EVENT_PATH", "")),
            log_level=str(extra.get("log_level") or cfg["logging"]["level"]).upper(),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}") from e
