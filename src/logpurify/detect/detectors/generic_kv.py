"""Policy enforcement for arbitrary `key=value` / `key: value` pairs.

- block-listed key: the value is always masked, whatever it looks like
- allow-listed key: nothing happens here
- unknown key: nothing happens here; more specific detectors may still fire

The registry puts this detector first whenever a key policy is configured.

    x-auth-token=abc123      -> x-auth-token=[MASKED]
    X-API-KEY   =   SECRET   -> X-API-KEY   =   [MASKED]
"""

from __future__ import annotations
import re
from typing import Optional
from ..base import NOT_PLACEHOLDER, Detector, DetectionResult, Span
from ..key_policy import KeyPolicy

# value runs until whitespace, comma, semicolon, quote or closing bracket
KV_RE = re.compile(
    r"\b([A-Za-z0-9._-]{1,128})\s*[:=]\s*" + NOT_PLACEHOLDER + r"([^\s,;\"'\])}]{1,2048})"
)

KIND = "blockedKey"
MASK = "[MASKED]"

class GenericKvBlocklistDetector(Detector):
    name = "key_blocklist"

    def __init__(self, policy: Optional[KeyPolicy] = None):
        self.policy = policy or KeyPolicy()

    def detect(self, text):
        if not text or not self.policy.block:
            return DetectionResult.empty()
        spans = []
        for m in KV_RE.finditer(text):
            if self.policy.is_blocked(m.group(1)):
                spans.append(Span(m.start(2), m.end(2), KIND, MASK))
        return DetectionResult.of(spans)
