"""Versioned prompt templates.

Templates live in ``costume/prompts`` as ``<name>_<version>.txt``. The
manifest ``prompt_versions.json`` maps each name to its active version:

    {"costume_system": {"active": "v1"}}

Lines of the form ``[v1: ...]`` record template history and are never sent
to the model.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import structlog

log = structlog.get_logger("prompt_versioning")

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"
VERSIONS_FILE = PROMPTS_DIR / "prompt_versions.json"

DEFAULT_VERSION = "v1"

_CHANGELOG_LINE_RE = re.compile(r"^\[v[^\]\n]*\]$")


def _manifest() -> dict[str, dict[str, str]]:
    if not VERSIONS_FILE.exists():
        return {}
    try:
        data = json.loads(VERSIONS_FILE.read_text())
    except (json.JSONDecodeError, OSError) as e:
        log.error("prompt_manifest_corrupted", path=str(VERSIONS_FILE), error=str(e))
        return {}
    return data if isinstance(data, dict) else {}


def get_active_version(prompt_name: str) -> str:
    entry = _manifest().get(prompt_name) or {}
    return entry.get("active", DEFAULT_VERSION)


def load_versioned_prompt(prompt_name: str, version: str | None = None) -> str:
    """Return the template text for ``prompt_name`` with changelog lines removed.

    Uses ``version`` if given, else the manifest's active version. A missing
    versioned file falls back to the unversioned ``<name>.txt``.

    Raises:
        FileNotFoundError: neither file exists.
    """
    version = version or get_active_version(prompt_name)
    candidates = (
        PROMPTS_DIR / f"{prompt_name}_{version}.txt",
        PROMPTS_DIR / f"{prompt_name}.txt",
    )
    for path in candidates:
        if path.exists():
            return strip_changelog_lines(path.read_text())
    raise FileNotFoundError(
        f"No prompt file for {prompt_name!r} ({version}): tried "
        + ", ".join(str(p) for p in candidates)
    )


def strip_changelog_lines(text: str) -> str:
    kept = [line for line in text.split("\n") if not _CHANGELOG_LINE_RE.match(line)]
    return "\n".join(kept).lstrip("\n")
