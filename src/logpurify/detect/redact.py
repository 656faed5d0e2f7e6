"""Span merge and rewrite.

Every detector runs over the *original* text; their spans are then reconciled
in one pass:

1. clamp spans into `[0, len(text)]` (an out-of-range span is a detector bug
   and is logged as such)
2. sort by start ascending, then end descending
3. merge touching/overlapping spans; the first span of a merged group (the
   leftmost, or the longest at a tied start, or the earliest detector in
   pipeline order when start and end tie) decides kind and replacement
4. rewrite left to right, copying untouched text verbatim

The output never gets re-scanned, so a replacement token cannot be redacted
again by a later detector, and the result does not depend on detector
execution order beyond the tie-break in (3).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple
from .base import Action, Detector, Finding, Span

log = logging.getLogger("logpurify.redact")


@dataclass(frozen=True)
class RedactionResult:
    text: Optional[str]
    findings: Tuple[Finding, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.findings)

    def kinds(self) -> List[str]:
        return sorted({f.kind for f in self.findings})


def clamp_span(span: Span, length: int, detector_name: str = "?") -> Span:
    start = max(0, min(span.start, length))
    end = max(start, min(span.end, length))
    if start != span.start or end != span.end:
        log.warning(
            "detector %s emitted out-of-range span (%d, %d) for text of length %d; clamped to (%d, %d)",
            detector_name, span.start, span.end, length, start, end,
        )
        return Span(start, end, span.kind, span.replacement)
    return span


def merge_spans(spans: Iterable[Span]) -> List[Span]:
    """Union touching or overlapping spans into an ordered, non-overlapping list."""
    ordered = sorted(spans, key=lambda s: (s.start, -s.end))
    merged: List[Span] = []
    cur: Optional[Span] = None
    for s in ordered:
        if cur is not None and s.start <= cur.end:
            if s.end > cur.end:
                cur = Span(cur.start, s.end, cur.kind, cur.replacement)
            continue
        if cur is not None:
            merged.append(cur)
        cur = s
    if cur is not None:
        merged.append(cur)
    return merged


def rewrite(text: str, merged: Sequence[Span]) -> str:
    """Single left-to-right pass; `merged` must come from merge_spans."""
    parts: List[str] = []
    last = 0
    for s in merged:
        parts.append(text[last:s.start])
        parts.append(s.replacement)
        last = s.end
    parts.append(text[last:])
    return "".join(parts)


class RedactionEngine:
    """Runs a detector pipeline over a string and emits the redacted string plus findings.

    Holds only the immutable detector tuple and the configured action, so a
    single instance can be shared across threads.
    """

    def __init__(self, detectors: Sequence[Detector], action: Action = Action.MASK):
        self._detectors: Tuple[Detector, ...] = tuple(detectors)
        self._action = action or Action.MASK

    @property
    def detectors(self) -> Tuple[Detector, ...]:
        return self._detectors

    @property
    def action(self) -> Action:
        return self._action

    def collect_spans(self, text: str) -> List[Span]:
        """Run every detector in pipeline order and return clamped spans."""
        n = len(text)
        spans: List[Span] = []
        for d in self._detectors:
            try:
                found = d.detect(text).spans
            except Exception:
                log.exception("detector %s failed; its spans are skipped for this call", d.name)
                continue
            for s in found:
                spans.append(clamp_span(s, n, d.name))
        return spans

    def merged_spans(self, text: Optional[str]) -> List[Span]:
        if not text:
            return []
        return merge_spans(self.collect_spans(text))

    def redact(self, text: Optional[str], source: Optional[str] = None) -> RedactionResult:
        if not text:
            return RedactionResult(text)
        merged = self.merged_spans(text)
        if not merged:
            return RedactionResult(text)
        findings = tuple(Finding(s.kind, self._action, s.start, s.end, source) for s in merged)
        return RedactionResult(rewrite(text, merged), findings)

    def apply(self, text: Optional[str]) -> Optional[str]:
        return self.redact(text).text
