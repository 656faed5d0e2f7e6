"""Mode application (dry-run / mask / strict) on top of the redaction engine.

The engine always computes the redacted text; what reaches the sink is decided here:
- dry_run: original text is kept; findings are reported with action "warn"
- mask: redacted text
- strict: the whole message becomes `strict_marker` whenever anything was found

`sanitize_fields` handles structured context (MDC-like maps): each entry is
rendered as a synthetic `key=value` so key-based detectors can fire, then the
value part is cut back out of the redacted string right after the `key=` prefix.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from .detect.base import Mode, action_for
from .detect.redact import RedactionEngine, RedactionResult
from .policies.loader import DEFAULT_STRICT_MARKER, RedactionPolicy, build_engine
from .report import NoopReporter, Reporter

log = logging.getLogger("logpurify.sanitize")


class MessageSanitizer:
    def __init__(
        self,
        engine: RedactionEngine,
        mode: Mode = Mode.MASK,
        strict_marker: str = DEFAULT_STRICT_MARKER,
        reporter: Optional[Reporter] = None,
        enabled: bool = True,
    ):
        self.engine = engine
        self.mode = Mode.parse(mode)
        self.strict_marker = strict_marker
        self.reporter = reporter or NoopReporter()
        self.enabled = bool(enabled)
        if engine.action is not action_for(self.mode):
            log.warning("engine action %s does not match mode %s", engine.action.value, self.mode.value)

    @classmethod
    def from_policy(cls, policy: RedactionPolicy, reporter: Optional[Reporter] = None) -> "MessageSanitizer":
        return cls(
            build_engine(policy),
            mode=policy.mode,
            strict_marker=policy.strict_marker,
            reporter=reporter,
            enabled=policy.enabled,
        )

    def sanitize_detailed(self, message: Optional[str], source: Optional[str] = None) -> RedactionResult:
        if not self.enabled or not message:
            return RedactionResult(message)
        result = self.engine.redact(message, source)
        if not result.findings:
            return result
        self.reporter.report(result.findings)
        if self.mode is Mode.DRY_RUN:
            return RedactionResult(message, result.findings)
        if self.mode is Mode.STRICT:
            return RedactionResult(self.strict_marker, result.findings)
        return result

    def sanitize(self, message: Optional[str], source: Optional[str] = None) -> Optional[str]:
        return self.sanitize_detailed(message, source).text

    def sanitize_fields(self, fields: Optional[Mapping[Any, Any]], source: Optional[str] = None) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if not fields:
            return out
        for key, value in fields.items():
            if key is None:
                continue
            key = str(key)
            if value is None or value == "":
                out[key] = value
                continue
            prefix = f"{key}="
            combined = prefix + str(value)
            masked = self.sanitize(combined, source)
            if masked == combined:
                out[key] = value if isinstance(value, str) else str(value)
            elif masked.startswith(prefix):
                out[key] = masked[len(prefix):]
            else:
                # key was rewritten too; a strict marker has no "=" and is kept whole
                eq = masked.find("=")
                out[key] = masked[eq + 1:] if eq >= 0 else masked
        return out
