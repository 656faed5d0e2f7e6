"""Factories for ad-hoc rules.

RegexDetector masks every match of a pattern. KvDetector masks only the named
`val` group; the key comes from an optional named `key` group or, when the
pattern has none, from a `key=` / `key:` shape right before the value.

Patterns are compiled in the constructor, so a broken rule fails when the
pipeline is built and never at call time.
"""

from __future__ import annotations
import re
from typing import Optional, Pattern, Union
from ..base import Detector, DetectionResult, Span
from ..key_policy import KeyPolicy

KEY_LOOKBACK = 40
_KEY_BEFORE_RE = re.compile(r"([A-Za-z0-9._-]{1,64})[\"']?\s*[:=]\s*[\"']?$")


def _compile(pattern: Union[str, Pattern], flags: int) -> Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, flags)


def key_before(text: str, pos: int, lookback: int = KEY_LOOKBACK) -> Optional[str]:
    """The key of a `key[:=]` shape ending right at `pos`, if any."""
    m = _KEY_BEFORE_RE.search(text[max(0, pos - lookback):pos])
    return m.group(1) if m else None


class RegexDetector(Detector):
    def __init__(self, name: str, pattern: Union[str, Pattern], kind: Optional[str] = None,
                 replacement: str = "[MASKED]", flags: int = 0):
        self.name = name
        self.pattern = _compile(pattern, flags)
        self.kind = kind or name
        self.replacement = replacement

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        return DetectionResult.of(
            Span(m.start(), m.end(), self.kind, self.replacement)
            for m in self.pattern.finditer(text)
            if m.end() > m.start()  # an empty match would insert the placeholder everywhere
        )


class KvDetector(Detector):
    """Key policy precedence: allow-listed keys are skipped unless also block-listed;
    unknown keys are masked."""

    def __init__(self, name: str, pattern: Union[str, Pattern], replacement: str = "[MASKED]",
                 kind: Optional[str] = None, policy: Optional[KeyPolicy] = None, flags: int = 0):
        self.name = name
        self.pattern = _compile(pattern, flags)
        if "val" not in self.pattern.groupindex:
            raise ValueError(f"KV rule {name!r} needs a named group (?P<val>...) for the value")
        self._has_key = "key" in self.pattern.groupindex
        self.replacement = replacement
        self.kind = kind or name
        self.policy = policy

    def _key_for(self, text: str, m: "re.Match") -> Optional[str]:
        if self._has_key and m.group("key") is not None:
            return m.group("key")
        return key_before(text, m.start("val"))

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        for m in self.pattern.finditer(text):
            if m.start("val") < 0:
                continue
            if self.policy is not None and self.policy.has_rules:
                key = self._key_for(text, m)
                if self.policy.is_allowed(key) and not self.policy.is_blocked(key):
                    continue
            spans.append(Span(m.start("val"), m.end("val"), self.kind, self.replacement))
        return DetectionResult.of(spans)
