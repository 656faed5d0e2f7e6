"""`password=...` / `secret: ...` style pairs.

Key precedence: masked unless the key is allow-listed *and* not block-listed
(block wins over allow). The key set is fixed, so there are no unknown keys.
"""

from __future__ import annotations
import re
from typing import Optional
from ..base import NOT_PLACEHOLDER, Detector, DetectionResult, Span
from ..key_policy import KeyPolicy

PASSWORD_RE = re.compile(
    r"\b(password|passwd|pwd|secret|passphrase)\s*[:=]\s*" + NOT_PLACEHOLDER + r"([^\s,;]{1,256})",
    re.IGNORECASE,
)

KIND = "password"
MASK = "[MASKED]"

class PasswordKvDetector(Detector):
    name = "password_kv"

    def __init__(self, policy: Optional[KeyPolicy] = None):
        self.policy = policy or KeyPolicy()

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        for m in PASSWORD_RE.finditer(text):
            key = m.group(1)
            if self.policy.is_allowed(key) and not self.policy.is_blocked(key):
                continue
            spans.append(Span(m.start(2), m.end(2), KIND, MASK))
        return DetectionResult.of(spans)
