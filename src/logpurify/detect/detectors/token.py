"""JWT-like tokens and `Authorization: Bearer <token>`.

Contextual matches (Bearer header, `token=` / `access_token:` pairs) stay
permissive: three or more dot-separated base64url segments of length >= 2.

Bare matches are stricter so that dotted identifiers such as
`com.example.service.ClassName` are left alone:
- >= 3 segments of length >= 10, total length >= 50
- first segment starts with "eyJ" (base64 of a JSON object)
- a digit somewhere in the first or second segment
- the ~64 chars before the match do not end in a dotted namespace prefix

Spans from the three scans are merged before returning, so one logical token
is never reported as several fragments.
"""

from __future__ import annotations
import re
from ..base import Detector, DetectionResult, Span
from ..redact import merge_spans

KIND = "token"
MASK = "[MASKED_TOKEN]"

_B64U = r"[A-Za-z0-9_-]"
# Contextual captures sit after a literal prefix and are unbounded; the bare form
# can start anywhere and is capped.
_SEG_RELAXED = _B64U + r"{2,}"
_MULTI_RELAXED = "(" + _SEG_RELAXED + r"(?:\." + _SEG_RELAXED + "){2,})"
_SEG_STRICT = _B64U + r"{10,4096}"
_MULTI_STRICT = "(" + _SEG_STRICT + r"(?:\." + _SEG_STRICT + "){2,32})"

BEARER_RE = re.compile(r"(Authorization\s*:\s*Bearer\s+)" + _MULTI_RELAXED, re.IGNORECASE)
KV_RE = re.compile(r"\b(token|access[_-]?token|id[_-]?token)\s*[:=]\s*" + _MULTI_RELAXED, re.IGNORECASE)
BARE_RE = re.compile(r"(?<![A-Za-z0-9_-])" + _MULTI_STRICT + r"(?![A-Za-z0-9_-])")

MIN_BARE_LEN = 50
LEFT_CONTEXT = 64
_DIGIT_RE = re.compile(r"[0-9]")
_NAMESPACE_LEFT_RE = re.compile(r"(?:[a-z]+\.)+[A-Za-z_$][A-Za-z0-9_$]*\.?$")


def is_plausible_bare_token(text: str, start: int, token: str) -> bool:
    if len(token) < MIN_BARE_LEN:
        return False
    segs = token.split(".")
    if len(segs) < 3:
        return False
    header, payload = segs[0], segs[1]
    if not header.startswith("eyJ"):
        return False
    if not (_DIGIT_RE.search(header) or _DIGIT_RE.search(payload)):
        return False
    left = text[max(0, start - LEFT_CONTEXT):start]
    return _NAMESPACE_LEFT_RE.search(left) is None


class TokenDetector(Detector):
    name = "token_bearer"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = [Span(m.start(2), m.end(2), KIND, MASK) for m in BEARER_RE.finditer(text)]
        spans.extend(Span(m.start(2), m.end(2), KIND, MASK) for m in KV_RE.finditer(text))
        for m in BARE_RE.finditer(text):
            if is_plausible_bare_token(text, m.start(1), m.group(1)):
                spans.append(Span(m.start(1), m.end(1), KIND, MASK))
        if not spans:
            return DetectionResult.empty()
        return DetectionResult.of(merge_spans(spans))
