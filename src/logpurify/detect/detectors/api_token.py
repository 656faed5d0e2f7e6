"""Well-known vendor token formats (Stripe, Slack, GitHub, OpenAI/Anthropic)."""

from __future__ import annotations
import re
from ..base import Detector, DetectionResult, Span

KIND = "apiToken"
MASK = "[MASKED_API_TOKEN]"

PATTERNS = (
    re.compile(r"\b(?:sk|pk)_(?:test|live)_[A-Za-z0-9]{10,256}\b"),
    re.compile(r"\bxox[abprs]-[A-Za-z0-9-]{8,256}\b"),
    re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,256}\b|\bgithub_pat_[A-Za-z0-9_]{20,256}\b"),
    re.compile(r"\bsk-(?:ant-)?[A-Za-z0-9_-]{20,256}\b"),
)

class ApiTokenWellKnownDetector(Detector):
    name = "api_token_well_known"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        for pat in PATTERNS:
            spans.extend(Span(m.start(), m.end(), KIND, MASK) for m in pat.finditer(text))
        return DetectionResult.of(spans)
