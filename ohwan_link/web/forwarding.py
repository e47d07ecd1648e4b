"""
Route forwarding table for single-page app routing.

Each rule maps a URL path pattern to a document under the static root.
Matching requests are answered with that document as if it had been
requested directly, so the browser keeps its URL and client-side routing
takes over.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Pattern, Tuple

from ohwan_link.config import DEFAULT_ENTRY_DOCUMENT

# [A-Za-z0-9_-]+ ; re.ASCII keeps \w from matching non-ASCII letters
SEGMENT = r"[\w-]+"

ROOT_PATTERN = r"/"
SINGLE_SEGMENT_PATTERN = rf"/{SEGMENT}"
# First segment is anything but exactly "api", then zero or more
# intermediate segments, then a word/hyphen final segment.
DEEP_LINK_PATTERN = rf"/(?!api/)[^/]+(?:/[^/]+)*/{SEGMENT}"


@dataclass(frozen=True)
class ForwardingRule:
    """A URL path pattern forwarded to a static document."""

    name: str
    pattern: str
    target: str
    _regex: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", re.compile(self.pattern, re.ASCII))

    def matches(self, path: str) -> bool:
        """Return True if the whole URL path (no query string) matches."""
        return self._regex.fullmatch(path) is not None


ForwardingTable = Tuple[ForwardingRule, ...]


def build_forwarding_table(entry_document: str = DEFAULT_ENTRY_DOCUMENT) -> ForwardingTable:
    """Return the default rules, all forwarding to ``entry_document``."""
    return (
        ForwardingRule("root", ROOT_PATTERN, entry_document),
        ForwardingRule("single-segment", SINGLE_SEGMENT_PATTERN, entry_document),
        ForwardingRule("deep-link", DEEP_LINK_PATTERN, entry_document),
    )


DEFAULT_FORWARDING_TABLE = build_forwarding_table()


def match_forward(path: str, table: Iterable[ForwardingRule]) -> Optional[ForwardingRule]:
    """Return the first rule in table order matching ``path``, or None."""
    for rule in table:
        if rule.matches(path):
            return rule
    return None
