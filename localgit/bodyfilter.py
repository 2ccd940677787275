"""
Body Filter - Strip unwanted trailers and footers from PR bodies and commit messages.

Rules are regular expressions applied in order, each one seeing the output of
the previous rule. Every match is replaced with the empty string, then runs
of three or more newlines are collapsed to a single blank line and the result
is trimmed. The pass is repeated until the text stops changing, which makes
the transformation idempotent.

Default rules remove:
- Co-Authored-By trailer lines
- "Pull Request opened by [Tool](url) with guidance from ..." footer blocks

Usage:
    from localgit.bodyfilter import BodyFilter, filter_body

    cleaned = filter_body(message)            # process-wide default filter

    custom = BodyFilter()
    result = custom.configure([r"(?m)^Signed-off-by:.*$", "("])
    result.rejected[0].pattern                # "("
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Tuple

from .logger import get_logger

_logger = get_logger()


DEFAULT_FILTER_PATTERNS: Tuple[str, ...] = (
    # Co-Authored-By trailer, full line
    r"(?m)^Co-Authored-By:.*$",
    # Tool footer; (?s) lets the separator and the footer text sit on different lines
    r"(?s)---\s*Pull Request opened by \[[^\]]+\]\([^)]+\) with guidance from [^\n]+",
)

# Gaps left behind by removed lines
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class FilterConfig:
    """Ordered pattern strings for a BodyFilter.

    Attributes:
        patterns: Regular expressions, applied in this order
    """
    patterns: Tuple[str, ...] = DEFAULT_FILTER_PATTERNS

    @classmethod
    def default(cls) -> "FilterConfig":
        return cls()

    @classmethod
    def from_list(cls, patterns: Sequence[str]) -> "FilterConfig":
        return cls(patterns=tuple(patterns))


@dataclass(frozen=True)
class RejectedPattern:
    """A pattern that failed to compile."""
    pattern: str
    error: str


@dataclass
class ConfigureResult:
    """Outcome of BodyFilter.configure.

    Attributes:
        accepted: Patterns compiled into the active rule set, in order
        rejected: Patterns that were skipped, with the compile error
    """
    accepted: List[str] = field(default_factory=list)
    rejected: List[RejectedPattern] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected


class BodyFilter:
    """Ordered set of removal rules applied to free-form text.

    The active rule set is a tuple replaced as a whole on configure(), so a
    concurrent filter() call sees either the old rules or the new ones.
    """

    def __init__(self, config: Optional[FilterConfig] = None):
        self._rules: Tuple[Pattern[str], ...] = ()
        self.configure((config or FilterConfig.default()).patterns)

    @property
    def patterns(self) -> List[str]:
        """Source strings of the active rules."""
        return [rule.pattern for rule in self._rules]

    def configure(self, patterns: Sequence[str]) -> ConfigureResult:
        """Replace the rule set.

        Patterns that fail to compile are logged and skipped; the rest are
        still installed.

        Args:
            patterns: Regular expressions, in application order

        Returns:
            ConfigureResult listing accepted and rejected patterns
        """
        result = ConfigureResult()
        compiled: List[Pattern[str]] = []

        for pattern in patterns:
            try:
                if not isinstance(pattern, str):
                    raise TypeError(f"pattern must be a string, got {type(pattern).__name__}")
                compiled.append(re.compile(pattern))
            except (re.error, TypeError) as e:
                _logger.warn("bodyfilter", "pattern_rejected", {
                    "pattern": pattern,
                    "error": str(e),
                })
                result.rejected.append(RejectedPattern(pattern=str(pattern), error=str(e)))
                continue
            result.accepted.append(pattern)

        self._rules = tuple(compiled)
        return result

    def filter(self, text: str) -> str:
        """Remove every rule match from text and normalize the leftover whitespace."""
        if not text:
            return text

        rules = self._rules
        filtered = text
        # Stripping or a removal can expose a new line start; repeat until
        # stable. Every pass only deletes text, so this terminates.
        while True:
            previous = filtered
            for rule in rules:
                filtered = rule.sub("", filtered)
            filtered = _EXCESS_NEWLINES.sub("\n\n", filtered).strip()
            if filtered == previous:
                return filtered


_default_filter = BodyFilter()


def get_default_filter() -> BodyFilter:
    """Get the process-wide filter used by the git tools."""
    return _default_filter


def set_filter_patterns(patterns: Sequence[str]) -> ConfigureResult:
    """Replace the process-wide rule set."""
    return _default_filter.configure(patterns)


def filter_body(text: str) -> str:
    """Filter text with the process-wide rule set."""
    return _default_filter.filter(text)
