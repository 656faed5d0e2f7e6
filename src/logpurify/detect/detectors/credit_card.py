"""Bare card numbers: 13-19 digits (optionally separated by spaces/dashes), Luhn-validated."""

from __future__ import annotations
import re
from ..base import Detector, DetectionResult, Span

# Candidate runs are 13-20 chars of digits/whitespace/dashes, bounded by non-digits.
DIGITS_RE = re.compile(r"(?<![0-9])([0-9][0-9\s-]{11,18}[0-9])(?![0-9])")
_SEP_RE = re.compile(r"[\s-]")

KIND = "card"
MASK = "[MASKED_CARD]"


def luhn_ok(digits: str) -> bool:
    total = 0
    double = False
    for ch in reversed(digits):
        d = ord(ch) - 48
        if double:
            d += d
            if d > 9:
                d -= 9
        total += d
        double = not double
    return total % 10 == 0


class CreditCardDetector(Detector):
    name = "credit_card"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        for m in DIGITS_RE.finditer(text):
            raw = _SEP_RE.sub("", m.group(1))
            if 13 <= len(raw) <= 19 and luhn_ok(raw):
                spans.append(Span(m.start(1), m.end(1), KIND, MASK))
        return DetectionResult.of(spans)
