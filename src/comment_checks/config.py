# src/comment_checks/config.py
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Pattern

from loguru import logger

NEVER_MATCHES = r"(?!)"   # default format: a comment can never match it
SECTION = "SingleLineCommentCheck"


class ConfigError(ValueError):
    """Raised when a rule cannot be configured, before any file is checked."""


def _compile(fmt: str) -> Pattern[str]:
    try:
        return re.compile(fmt)
    except re.error as e:
        raise ConfigError(f"Invalid format {fmt!r}: {e}") from e


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """
    Settings of the single-line comment check: a pattern which the whole
    text of a block comment must match, and the message to report.
    Built once per run and never changed afterwards.
    """
    pattern: Pattern[str] = field(default_factory=lambda: _compile(NEVER_MATCHES))
    message: str = ""

    @staticmethod
    def compile(fmt: str, message: str = "") -> "RuleConfig":
        return RuleConfig(pattern=_compile(fmt), message=message)

    def matches(self, text: str) -> bool:
        return self.pattern.fullmatch(text) is not None


def load_config(
    path: Optional[Path] = None,
    fmt: Optional[str] = None,
    message: Optional[str] = None,
) -> RuleConfig:
    """
    Read the rule settings from a JSON file, e.g.

        {"SingleLineCommentCheck": {"format": "^/\\*.*\\*/$",
                                    "message": "Use // comments"}}

    and apply the command line overrides on top of it.
    """
    props: Dict[str, Any] = {}
    if path is not None:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must hold a JSON object")
        section = data.get(SECTION, {})
        if not isinstance(section, dict):
            raise ConfigError(f"Section {SECTION} in {path} must be an object")
        unknown = set(section) - {"format", "message"}
        if unknown:
            raise ConfigError(f"Unknown properties in {SECTION}: {sorted(unknown)}")
        props.update(section)
    if fmt is not None:
        props["format"] = fmt
    if message is not None:
        props["message"] = message

    if "format" not in props:
        logger.debug("No format configured, single-line comment check is inert")
        return RuleConfig(message=str(props.get("message", "")))
    if not isinstance(props["format"], str):
        raise ConfigError("Property 'format' must be a string")
    config = RuleConfig.compile(props["format"], str(props.get("message", "")))
    logger.debug(f"Configured format {config.pattern.pattern!r}")
    return config
