from __future__ import annotations
import base64
import binascii
import re
from ..base import Detector, DetectionResult, Span

# No trailing \b: assert the next char is not a base64 char instead.
BASIC_RE = re.compile(r"\bBasic\s+([A-Za-z0-9+/=]{8,4096})(?![A-Za-z0-9+/=])", re.IGNORECASE)

KIND = "basicAuth"
MASK = "[MASKED_BASIC_AUTH]"


def looks_like_basic_credentials(b64: str) -> bool:
    """True if `b64` decodes to a "user:pass" shaped string."""
    padded = b64 if "=" in b64 else b64 + "=" * (-len(b64) % 4)
    try:
        decoded = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError):
        return False
    val = decoded.decode("latin-1")
    idx = val.find(":")
    return 0 < idx < len(val) - 1


class BasicAuthDetector(Detector):
    name = "basic_auth"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        for m in BASIC_RE.finditer(text):
            if looks_like_basic_credentials(m.group(1)):
                spans.append(Span(m.start(1), m.end(1), KIND, MASK))
        return DetectionResult.of(spans)
