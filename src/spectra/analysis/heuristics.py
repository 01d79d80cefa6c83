"""Filename risk heuristics for files that may hold secrets."""

import re
from enum import Enum
from functools import lru_cache
from pathlib import PurePath
from typing import Optional, Tuple, Union

_SENSITIVE_PATTERNS = (
    r"password",
    r"secret",
    r"key",
    r"token",
    r"\.pem$",
    r"\.kdbx$",  # KeePass
    r"backup",
    r"dump",
    r"\.p12$",
    r"\.pfx$",
    r"credentials",
    r"\.env$",
    r"config",
    r"\.ssh",
    r"wallet",
)


class RiskLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


@lru_cache(maxsize=1)
def sensitive_patterns() -> Tuple[re.Pattern, ...]:
    """Compiled sensitive-name patterns, built once on first use."""
    return tuple(re.compile(p, re.IGNORECASE) for p in _SENSITIVE_PATTERNS)


def _matches_any(text: str) -> bool:
    return any(p.search(text) for p in sensitive_patterns())


def analyze_filename_risk(path: Union[str, PurePath]) -> Optional[RiskLevel]:
    """Classify *path* by how likely its name marks sensitive content.

    Returns ``None`` when nothing in the name or path looks sensitive.
    """
    p = PurePath(path)
    filename = p.name
    if not filename:
        return None

    path_str = str(p).lower()
    name = filename.lower()

    if not _matches_any(filename) and not _matches_any(path_str):
        return None

    if (
        name.endswith((".pem", ".p12", ".pfx"))
        or "password" in name
        or "secret" in name
        or ".ssh" in path_str
        or "wallet" in name
    ):
        return RiskLevel.CRITICAL

    if "credential" in name or "token" in name or name.endswith(".kdbx") or name == ".env":
        return RiskLevel.HIGH

    if "backup" in name or "dump" in name or "config" in name or "key" in name:
        return RiskLevel.MEDIUM

    return RiskLevel.LOW
