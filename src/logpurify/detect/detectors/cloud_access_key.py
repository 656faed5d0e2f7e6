"""Cloud access keys (AWS, GCP), Azure SAS signatures and generic `x-api-key` style pairs.

The generic pair form is skipped when its key is allow-listed. The block list
does not matter here because unknown keys are masked anyway.
"""

from __future__ import annotations
import re
from typing import Optional
from ..base import Detector, DetectionResult, Span
from ..key_policy import KeyPolicy

AWS_RE = re.compile(r"\b(?:AKIA|ASIA|AIDA|AGPA)[A-Z0-9]{16}\b")
GCP_RE = re.compile(r"\bAIza[0-9A-Za-z_-]{35}(?![0-9A-Za-z_-])")
SAS_SIG_RE = re.compile(r"([?&]sig=)([A-Za-z0-9%+/=_-]{10,1024})", re.IGNORECASE)
KV_RE = re.compile(
    r"\b([A-Za-z0-9_-]{0,64}?(?:api[-_]?key|access[-_]?key))\s*[:=]\s*([A-Za-z0-9._~+/=-]{8,1024})",
    re.IGNORECASE,
)

KIND = "cloudAccessKey"
MASK = "[MASKED_ACCESS_KEY]"

class CloudAccessKeyDetector(Detector):
    name = "cloud_access_key"

    def __init__(self, policy: Optional[KeyPolicy] = None):
        self.policy = policy or KeyPolicy()

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = [Span(m.start(), m.end(), KIND, MASK) for m in AWS_RE.finditer(text)]
        spans.extend(Span(m.start(), m.end(), KIND, MASK) for m in GCP_RE.finditer(text))
        spans.extend(Span(m.start(2), m.end(2), KIND, MASK) for m in SAS_SIG_RE.finditer(text))
        for m in KV_RE.finditer(text):
            if self.policy.is_allowed(m.group(1)):
                continue
            spans.append(Span(m.start(2), m.end(2), KIND, MASK))
        return DetectionResult.of(spans)
