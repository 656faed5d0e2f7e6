"""Shared fixtures for the logpurify test suite."""

from __future__ import annotations

from typing import List, Sequence

import pytest

from logpurify.detect.base import Detector, DetectionResult, Finding, Span
from logpurify.detect.key_policy import KeyPolicy
from logpurify.detect.redact import RedactionEngine
from logpurify.detect.registry import build_pipeline
from logpurify.report import Reporter


class StaticDetector(Detector):
    """Returns the same spans for every non-empty input."""

    def __init__(self, name: str, spans: Sequence[Span]):
        self.name = name
        self._spans = tuple(spans)

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        return DetectionResult.of(self._spans)


class ExplodingDetector(Detector):
    name = "exploding"

    def detect(self, text):
        raise RuntimeError("boom")


class RecordingReporter(Reporter):
    def __init__(self) -> None:
        self.calls: List[List[Finding]] = []

    def report(self, findings) -> None:
        self.calls.append(list(findings))


def engine_of(*detectors: Detector) -> RedactionEngine:
    return RedactionEngine(detectors)


@pytest.fixture()
def default_engine() -> RedactionEngine:
    """All default detectors, no key policy."""
    return RedactionEngine(build_pipeline())


@pytest.fixture()
def policy_engine() -> RedactionEngine:
    """All default detectors with the default allow/block key lists."""
    return RedactionEngine(build_pipeline(policy=KeyPolicy.defaults()))
