# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline
"""
Redaction path table and matcher.

A redaction path names a field whose value must never reach a log record.
Three spellings are supported:

* exact dotted paths, e.g. ``user.email``;
* wildcard leaves, e.g. ``*.password``, matching that key at any depth;
* bracketed keys for names that are not identifiers, e.g.
  ``req.headers["x-api-key"]``. Keys are compared case-sensitively.

A ``*`` anywhere else in a path matches exactly one key.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

REDACTED: Final = "[REDACTED]"
WILDCARD: Final = "*"

REDACT_PATHS: Final[tuple[str, ...]] = (
    # Authentication
    "password",
    "token",
    "authorization",
    "auth",
    "secret",
    "key",
    "*.password",
    "*.token",
    "*.authorization",
    "*.auth",
    "*.secret",
    "*.key",
    # HTTP headers
    "req.headers.authorization",
    "req.headers.cookie",
    'req.headers["x-api-key"]',
    'res.headers["set-cookie"]',
    # Personal information
    "user.email",
    "user.phone",
    "user.ssn",
    "user.credit_card",
    "*.email",
    "*.phone",
    "*.ssn",
    "*.credit_card",
    "email",
    "phone",
    "ssn",
    "credit_card",
    # Payment
    "payment.card_number",
    "payment.cvv",
    "bank.account_number",
    "card_number",
    "cvv",
    "account_number",
)

_SEGMENT = re.compile(
    r"""\["(?P<dq>[^"]*)"\]|\['(?P<sq>[^']*)'\]|(?P<name>[^.\[\]]+)"""
)


def parse_path(path: str) -> tuple[str, ...]:
    """Split a redaction path into its keys.

    Args:
        path: Path in dotted/bracketed notation

    Returns:
        The sequence of keys

    Raises:
        ValueError: If the path is empty or malformed
    """
    segments: list[str] = []
    pos = 0
    while pos < len(path):
        if segments and path[pos] == ".":
            pos += 1
        match = _SEGMENT.match(path, pos)
        if match is None or match.end() == pos:
            raise ValueError(f"Invalid redaction path: {path!r}")
        segment = match.group("dq")
        if segment is None:
            segment = match.group("sq")
        if segment is None:
            segment = match.group("name")
        segments.append(segment)
        pos = match.end()
    if not segments:
        raise ValueError(f"Invalid redaction path: {path!r}")
    return tuple(segments)


@dataclass(frozen=True)
class RedactionRules:
    """Compiled redaction table."""

    patterns: frozenset[tuple[str, ...]]
    leaves: frozenset[str]

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> RedactionRules:
        """Compile a table of redaction paths."""
        patterns: set[tuple[str, ...]] = set()
        leaves: set[str] = set()
        for path in paths:
            segments = parse_path(path)
            if len(segments) == 2 and segments[0] == WILDCARD:
                leaves.add(segments[1])
            else:
                patterns.add(segments)
        return cls(frozenset(patterns), frozenset(leaves))

    def matches(self, path: tuple[str, ...]) -> bool:
        """Whether the value at ``path`` must be redacted."""
        if not path:
            return False
        if path[-1] in self.leaves or path in self.patterns:
            return True
        return any(
            len(pattern) == len(path)
            and all(p == WILDCARD or p == k for p, k in zip(pattern, path))
            for pattern in self.patterns
            if WILDCARD in pattern
        )


DEFAULT_REDACTION_RULES: Final = RedactionRules.from_paths(REDACT_PATHS)
