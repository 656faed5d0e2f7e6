"""Policy loader.

Policies are YAML files with simple keys. Keeping policies in YAML allows:
- easy review by security/compliance
- versioned configuration across deployments
- non-engineers to propose key allow/block list changes safely

Example:
```yaml
enabled: true
mode: mask                 # dry_run | mask | strict
detectors: [email, token_bearer, password_kv]   # empty -> defaults
key_allowlist: [traceId, requestId]
key_blocklist: [x-auth-token, cookie]
strict_marker: "[REDACTED]"
dsn:
  hints: ["://", "jdbc:", "server="]
  min_semicolons: 2
custom_rules:
  - name: employee_id
    pattern: 'EMP-[0-9]{6}'
    replacement: '[MASKED_EMPLOYEE]'
  - name: session
    type: kv
    pattern: '(?i)\bsession\s*=\s*(?P<val>[^\s,;]+)'
```

Keys may be written in snake_case or kebab-case.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import yaml

from ..detect.base import Detector, Mode, action_for
from ..detect.detectors import KvDetector, RegexDetector
from ..detect.detectors.db_credential import DEFAULT_DSN_HINTS, DEFAULT_MIN_SEMICOLONS
from ..detect.key_policy import KeyPolicy
from ..detect.redact import RedactionEngine
from ..detect.registry import DetectorType, build_pipeline, parse_types

RULE_TYPES = ("regex", "kv")
DEFAULT_STRICT_MARKER = "[REDACTED]"


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class CustomRule:
    name: str
    pattern: str
    type: str = "regex"
    replacement: str = "[MASKED]"
    kind: Optional[str] = None
    ignore_case: bool = False

    def build(self, policy: KeyPolicy) -> Detector:
        flags = re.IGNORECASE if self.ignore_case else 0
        if self.type == "kv":
            return KvDetector(self.name, self.pattern, self.replacement, kind=self.kind, policy=policy, flags=flags)
        return RegexDetector(self.name, self.pattern, kind=self.kind, replacement=self.replacement, flags=flags)


@dataclass(frozen=True)
class RedactionPolicy:
    enabled: bool = True
    mode: Mode = Mode.MASK
    detectors: Tuple[DetectorType, ...] = ()
    key_allowlist: Tuple[str, ...] = ()
    key_blocklist: Tuple[str, ...] = ()
    strict_marker: str = DEFAULT_STRICT_MARKER
    dsn_hints: Tuple[str, ...] = DEFAULT_DSN_HINTS
    dsn_min_semicolons: int = DEFAULT_MIN_SEMICOLONS
    custom_rules: Tuple[CustomRule, ...] = field(default_factory=tuple)

    def key_policy(self) -> KeyPolicy:
        return KeyPolicy.of(self.key_allowlist, self.key_blocklist)


def _canon(d: Dict[str, Any]) -> Dict[str, Any]:
    return {str(k).strip().lower().replace("-", "_"): v for k, v in d.items()}


def _str_list(value: Any, field_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{field_name} must be a list, got {type(value).__name__}")
    return tuple(str(v) for v in value if v is not None)


def _parse_rule(raw: Any, idx: int) -> CustomRule:
    if not isinstance(raw, dict):
        raise ValueError(f"custom_rules[{idx}] must be a mapping")
    r = _canon(raw)
    missing = [k for k in ("name", "pattern") if not r.get(k)]
    if missing:
        raise ValueError(f"custom_rules[{idx}] is missing {', '.join(missing)}")
    typ = str(r.get("type", "regex")).lower()
    if typ not in RULE_TYPES:
        raise ValueError(f"custom_rules[{idx}].type must be one of {RULE_TYPES}, got {typ!r}")
    return CustomRule(
        name=str(r["name"]),
        pattern=str(r["pattern"]),
        type=typ,
        replacement=str(r.get("replacement", "[MASKED]")),
        kind=r.get("kind"),
        ignore_case=bool(r.get("ignore_case", False)),
    )


def policy_from_dict(raw: Optional[Dict[str, Any]]) -> RedactionPolicy:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"policy must be a mapping, got {type(raw).__name__}")
    d = _canon(raw)
    dsn = _canon(d.get("dsn") or {})
    rules: List[CustomRule] = [_parse_rule(r, i) for i, r in enumerate(d.get("custom_rules") or [])]
    return RedactionPolicy(
        enabled=bool(d.get("enabled", True)),
        mode=Mode.parse(d.get("mode", Mode.MASK.value)),
        detectors=parse_types(_str_list(d.get("detectors"), "detectors")),
        key_allowlist=_str_list(d.get("key_allowlist"), "key_allowlist"),
        key_blocklist=_str_list(d.get("key_blocklist"), "key_blocklist"),
        strict_marker=str(d.get("strict_marker", DEFAULT_STRICT_MARKER)),
        dsn_hints=_str_list(dsn["hints"], "dsn.hints") if "hints" in dsn else DEFAULT_DSN_HINTS,
        dsn_min_semicolons=int(dsn.get("min_semicolons", DEFAULT_MIN_SEMICOLONS)),
        custom_rules=tuple(rules),
    )


def load_policy(path: str) -> RedactionPolicy:
    return policy_from_dict(load_yaml(path))


def build_engine(policy: Optional[RedactionPolicy] = None) -> RedactionEngine:
    """Build a ready engine; raises on any broken rule so a bad policy never half-loads."""
    policy = policy or RedactionPolicy()
    kp = policy.key_policy()
    detectors = build_pipeline(
        policy.detectors,
        kp,
        dsn_hints=policy.dsn_hints,
        dsn_min_semicolons=policy.dsn_min_semicolons,
        extra=[r.build(kp) for r in policy.custom_rules],
    )
    return RedactionEngine(detectors, action_for(policy.mode))
