from __future__ import annotations
import re
from ..base import Detector, DetectionResult, Span

# Local part and domain are bounded so a long run without "@" stays linear.
EMAIL_RE = re.compile(r"\b[a-z0-9._%+-]{1,64}@[a-z0-9.-]{1,255}\.[a-z]{2,24}\b", re.IGNORECASE)

KIND = "email"
MASK = "[MASKED_EMAIL]"

class EmailDetector(Detector):
    name = "email"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        return DetectionResult.of(Span(m.start(), m.end(), KIND, MASK) for m in EMAIL_RE.finditer(text))
