"""Detection primitives.

We separate:
- Detection: find sensitive substrings (kind, span, replacement)
- Merge + rewrite: reconcile spans from every detector (see redact.py)
- Mode decision: dry-run / mask / strict (see logpurify.sanitize)

All spans are half-open `[start, end)` offsets into the *original* text,
measured in str indices.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

# Value captures must not start on an existing placeholder, otherwise a second
# pass would re-mask "[MASKED" and append a stray bracket.
NOT_PLACEHOLDER = r"(?!\[(?:MASKED|REDACTED)[A-Z_]*\])"


class Action(str, Enum):
    WARN = "warn"
    MASK = "mask"


class Mode(str, Enum):
    DRY_RUN = "dry_run"
    MASK = "mask"
    STRICT = "strict"

    @classmethod
    def parse(cls, raw) -> "Mode":
        if isinstance(raw, Mode):
            return raw
        key = str(raw).strip().lower().replace("-", "_")
        for m in cls:
            if m.value == key:
                return m
        raise ValueError(f"Unknown mode: {raw!r}. Expected one of {[m.value for m in cls]}")


def action_for(mode: Mode) -> Action:
    """DRY_RUN only reports; MASK and STRICT both mask (STRICT escalates in the caller)."""
    if mode is Mode.DRY_RUN:
        return Action.WARN
    return Action.MASK


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    kind: str           # e.g. "email", "token", "dbCredential"
    replacement: str    # placeholder written in place of text[start:end]


@dataclass(frozen=True)
class DetectionResult:
    spans: Tuple[Span, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.spans)

    @staticmethod
    def empty() -> "DetectionResult":
        return EMPTY

    @staticmethod
    def of(spans: Iterable[Span]) -> "DetectionResult":
        spans = tuple(spans)
        return DetectionResult(spans) if spans else EMPTY


EMPTY = DetectionResult()


@dataclass(frozen=True)
class Finding:
    kind: str
    action: Action
    start: int
    end: int
    source: Optional[str] = None    # logger / source name, attribution only


class Detector(ABC):
    """A stateless scanner. Configuration is fixed at construction; `detect` must not
    write to the instance."""

    name: str = "detector"

    @abstractmethod
    def detect(self, text: Optional[str]) -> DetectionResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
