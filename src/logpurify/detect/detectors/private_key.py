"""PEM private key blocks (header, multi-line body, footer).

A header/footer scan instead of a lazy `[\\s\\S]*?` regex: once a header has
no footer after it, no later header can have one either, so we stop there and
the whole scan stays linear.
"""

from __future__ import annotations
import re
from ..base import Detector, DetectionResult, Span

_QUALIFIER = r"(?:RSA |EC |DSA |OPENSSH |ENCRYPTED )?"
HEADER_RE = re.compile(r"-----BEGIN " + _QUALIFIER + r"PRIVATE KEY-----")
FOOTER_RE = re.compile(r"-----END " + _QUALIFIER + r"PRIVATE KEY-----")

KIND = "privateKey"
MASK = "[MASKED_PRIVATE_KEY]"

class PrivateKeyDetector(Detector):
    name = "private_key"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        pos = 0
        while True:
            head = HEADER_RE.search(text, pos)
            if head is None:
                break
            foot = FOOTER_RE.search(text, head.end())
            if foot is None:
                break
            spans.append(Span(head.start(), foot.end(), KIND, MASK))
            pos = foot.end()
        return DetectionResult.of(spans)
