"""IPv4 dotted quads and a permissive colon-grouped IPv6 form.

The IPv6 pattern is deliberately loose, so it also masks `HH:MM:SS` timestamps
and the `::` in `Foo::bar`. These false positives are known and expected.
"""

from __future__ import annotations
import re
from ..base import Detector, DetectionResult, Span

IPV4_RE = re.compile(r"(?<![0-9])(?:[0-9]{1,3}\.){3}[0-9]{1,3}(?![0-9])")
# Permissive colon-grouped form; also catches "::1" and compressed addresses.
IPV6_RE = re.compile(r"\b(?:[0-9a-f]{0,4}:){2,7}[0-9a-f]{0,4}\b", re.IGNORECASE)

KIND = "ip"
MASK = "[MASKED_IP]"

class IpDetector(Detector):
    name = "ip"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = [Span(m.start(), m.end(), KIND, MASK) for m in IPV4_RE.finditer(text)]
        spans.extend(Span(m.start(), m.end(), KIND, MASK) for m in IPV6_RE.finditer(text))
        return DetectionResult.of(spans)
