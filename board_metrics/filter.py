"""
Allow/deny list for metric family names.

Patterns match a family name either as a shell glob (board_node_*) or as a
regular expression covering the whole name (board_(cluster|node)_cpu_.*).
Only one list can be active: an allow list exposes just the matching
families, a deny list exposes everything except them.
"""

import fnmatch
import re
from collections.abc import Iterable


class FilterError(Exception):
    """Invalid allow/deny list."""


class AllowDenyList:
    """Decides whether a named metric family is exposed."""

    def __init__(self, allow: Iterable[str] = (), deny: Iterable[str] = ()):
        self.allow = list(allow)
        self.deny = list(deny)

        if self.allow and self.deny:
            raise FilterError("Allow list and deny list are mutually exclusive")

        self._patterns = [
            (pattern, self._compile(pattern)) for pattern in (self.allow or self.deny)
        ]

    @staticmethod
    def _compile(pattern: str) -> re.Pattern[str]:
        try:
            return re.compile(pattern)
        except re.error as e:
            # Globs such as *_cpu are not valid regular expressions
            if "*" in pattern or "?" in pattern:
                return re.compile(fnmatch.translate(pattern))
            raise FilterError(f"Invalid metric pattern {pattern!r}: {e}") from e

    @property
    def is_allow_list(self) -> bool:
        return bool(self.allow)

    def _matches(self, name: str) -> bool:
        return any(
            fnmatch.fnmatchcase(name, pattern) or regex.fullmatch(name)
            for pattern, regex in self._patterns
        )

    def is_included(self, name: str) -> bool:
        """Check whether a family with this name should be exposed."""
        if self.is_allow_list:
            return self._matches(name)
        return not self._matches(name)

    def is_excluded(self, name: str) -> bool:
        return not self.is_included(name)

    def status(self) -> str:
        """Human-readable summary for startup logging."""
        if self.is_allow_list:
            return f"allowing metrics: {', '.join(self.allow)}"
        if self.deny:
            return f"excluding metrics: {', '.join(self.deny)}"
        return "exposing all metrics"

    def __repr__(self) -> str:
        return f"AllowDenyList(allow={self.allow!r}, deny={self.deny!r})"
