"""Pure utility functions for exclusion pattern handling.

Patterns follow the subset of rsync's --exclude-from format that matters
for plain path filtering. As in rsync, "*" and "?" stop at "/" while "**"
spans directories. These functions contain no I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable


# Lines starting with these characters are comments in rsync filter files
_COMMENT_PREFIXES = ("#", ";")
_EXCLUDE_RULE_PREFIX = "- "
_INCLUDE_RULE_PREFIX = "+ "


def translate_glob(pattern: str) -> str:
    """Translate an rsync wildcard pattern into a regular expression body.

    "*" and "?" never match "/", "**" matches anything including "/", and
    "[...]" is a character class ("[!...]" negated).

    Examples:
        >>> translate_glob("logs/*.log")
        'logs/[^/]*\\.log'
    """
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        char = pattern[i]
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[" and (end := pattern.find("]", i + 2)) != -1:
            body = pattern[i + 1 : end].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            i = end + 1
            continue
        else:
            parts.append(re.escape(char))
        i += 1
    return "".join(parts)


@lru_cache(maxsize=256)
def _compile(pattern: str, anchored: bool) -> re.Pattern[str]:
    # Unanchored patterns may start at any component boundary
    prefix = "^" if anchored else "(?:^|/)"
    return re.compile(f"{prefix}{translate_glob(pattern)}$")


@dataclass(frozen=True, slots=True)
class ExcludePattern:
    """A single parsed exclusion pattern.

    Attributes:
        pattern: Glob pattern with anchor and directory markers removed.
        anchored: Pattern started with "/" and matches from the tree root.
        dir_only: Pattern ended with "/" and matches directories only.
    """

    pattern: str
    anchored: bool = False
    dir_only: bool = False

    @classmethod
    def parse(cls, raw: str) -> ExcludePattern:
        """Parse one pattern line such as "/build/", "*.tmp" or "logs/*.log"."""
        dir_only = raw.endswith("/")
        anchored = raw.startswith("/")
        pattern = raw.strip("/")
        return cls(pattern=pattern, anchored=anchored, dir_only=dir_only)

    def matches(self, relative: str, is_dir: bool = False) -> bool:
        """Check a relative POSIX path against this pattern.

        Anchored patterns match the whole relative path. Other patterns match
        any trailing run of its components, so a pattern without a "/" matches
        the last component.

        Examples:
            >>> ExcludePattern.parse("*.tmp").matches("a/b/c.tmp")
            True
            >>> ExcludePattern.parse("/build/").matches("src/build", is_dir=True)
            False
            >>> ExcludePattern.parse("logs/*.log").matches("logs/a/b.log")
            False
        """
        if self.dir_only and not is_dir:
            return False

        return _compile(self.pattern, self.anchored).search(relative) is not None


def parse_exclude_lines(lines: Iterable[str]) -> list[ExcludePattern]:
    """Parse the lines of an exclusion file into patterns.

    Blank lines and comments are skipped. A leading "- " rule marker is
    accepted and removed. Include rules ("+ ") are not supported and are
    dropped.
    """
    patterns: list[ExcludePattern] = []
    for line in lines:
        raw = line.rstrip("\r\n")
        if not raw.strip() or raw.startswith(_COMMENT_PREFIXES):
            continue
        if raw.startswith(_INCLUDE_RULE_PREFIX):
            continue
        if raw.startswith(_EXCLUDE_RULE_PREFIX):
            raw = raw[len(_EXCLUDE_RULE_PREFIX) :]
        if raw.strip("/"):
            patterns.append(ExcludePattern.parse(raw))
    return patterns


def is_excluded(
    relative: str, patterns: Iterable[ExcludePattern], is_dir: bool = False
) -> bool:
    """Check whether any pattern excludes a relative path."""
    return any(p.matches(relative, is_dir=is_dir) for p in patterns)
