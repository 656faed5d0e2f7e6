"""Key policy shared by key/value detectors.

Key names are normalized before comparison: lower-cased and stripped of
dashes, underscores and whitespace, so "X-AUTH-TOKEN", "x_auth_token" and
"xAuthToken" all become "xauthtoken".

A key in neither set is "unknown"; what unknown means is decided by each
detector (see the detector docstrings).
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

_SEPARATORS_RE = re.compile(r"[-_\s]")

DEFAULT_ALLOW = ("traceId", "requestId", "correlationId")
DEFAULT_BLOCK = ("password", "secret", "apikey", "token", "authorization")


def normalize_key(key: Optional[str]) -> str:
    if key is None:
        return ""
    return _SEPARATORS_RE.sub("", str(key).lower())


def _normalize_all(keys: Optional[Iterable[str]]) -> FrozenSet[str]:
    if not keys:
        return frozenset()
    return frozenset(normalize_key(k) for k in keys if k is not None)


@dataclass(frozen=True)
class KeyPolicy:
    allow: FrozenSet[str] = field(default_factory=frozenset)
    block: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, allow: Optional[Iterable[str]] = None, block: Optional[Iterable[str]] = None) -> "KeyPolicy":
        return cls(_normalize_all(allow), _normalize_all(block))

    @classmethod
    def defaults(cls) -> "KeyPolicy":
        return cls.of(DEFAULT_ALLOW, DEFAULT_BLOCK)

    @property
    def has_rules(self) -> bool:
        return bool(self.allow or self.block)

    def is_allowed(self, raw_key: Optional[str]) -> bool:
        key = normalize_key(raw_key)
        return bool(key) and key in self.allow

    def is_blocked(self, raw_key: Optional[str]) -> bool:
        key = normalize_key(raw_key)
        return bool(key) and key in self.block
