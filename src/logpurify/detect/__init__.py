"""Detection & redaction engine.

Import surface:
- base: Span, DetectionResult, Detector, Finding, Action, Mode
- key_policy: KeyPolicy
- registry: DetectorType, build_pipeline
- redact: RedactionEngine
"""

from .base import Action, DetectionResult, Detector, Finding, Mode, Span, action_for
from .key_policy import KeyPolicy, normalize_key
from .redact import RedactionEngine, RedactionResult, merge_spans
from .registry import DetectorType, build_pipeline, default_types

__all__ = [
    "Action",
    "DetectionResult",
    "Detector",
    "DetectorType",
    "Finding",
    "KeyPolicy",
    "Mode",
    "RedactionEngine",
    "RedactionResult",
    "Span",
    "action_for",
    "build_pipeline",
    "default_types",
    "merge_spans",
    "normalize_key",
]
