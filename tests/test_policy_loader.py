from __future__ import annotations

import re
import textwrap

import pytest

from logpurify.detect.base import Action, Mode
from logpurify.detect.detectors import KvDetector, RegexDetector
from logpurify.detect.detectors.db_credential import DEFAULT_DSN_HINTS
from logpurify.detect.registry import DetectorType
from logpurify.policies.loader import (
    CustomRule,
    RedactionPolicy,
    build_engine,
    load_policy,
    policy_from_dict,
)

POLICY_YAML = textwrap.dedent(r"""
    enabled: true
    mode: strict
    detectors: [email, token-bearer, password_kv]
    key-allowlist: [traceId]
    key_blocklist: [x-auth-token, cookie]
    strict-marker: "<gone>"
    dsn:
      hints: ["://", "host="]
      min-semicolons: 3
    custom_rules:
      - name: employee_id
        pattern: 'EMP-[0-9]{6}'
        replacement: '[MASKED_EMPLOYEE]'
      - name: session
        type: kv
        pattern: '\bsession\s*=\s*(?P<val>[^\s,;]+)'
        ignore-case: true
""")


def _write(tmp_path, body):
    p = tmp_path / "policy.yaml"
    p.write_text(body, encoding="utf-8")
    return str(p)


def test_load_policy(tmp_path):
    policy = load_policy(_write(tmp_path, POLICY_YAML))
    assert policy.mode is Mode.STRICT
    assert policy.detectors == (DetectorType.EMAIL, DetectorType.TOKEN_BEARER, DetectorType.PASSWORD_KV)
    assert policy.key_allowlist == ("traceId",)
    assert policy.key_blocklist == ("x-auth-token", "cookie")
    assert policy.strict_marker == "<gone>"
    assert policy.dsn_hints == ("://", "host=")
    assert policy.dsn_min_semicolons == 3
    assert [r.name for r in policy.custom_rules] == ["employee_id", "session"]
    assert policy.custom_rules[1].type == "kv"
    assert policy.custom_rules[1].ignore_case


def test_empty_file_means_defaults(tmp_path):
    assert load_policy(_write(tmp_path, "")) == RedactionPolicy()


def test_defaults():
    p = policy_from_dict(None)
    assert p.enabled
    assert p.mode is Mode.MASK
    assert p.detectors == ()
    assert p.dsn_hints == DEFAULT_DSN_HINTS
    assert p.strict_marker == "[REDACTED]"


def test_single_string_list_value():
    assert policy_from_dict({"key_blocklist": "cookie"}).key_blocklist == ("cookie",)


@pytest.mark.parametrize("raw,match", [
    ({"mode": "loud"}, "Unknown mode"),
    ({"detectors": ["email", "phone"]}, "Unknown detector type"),
    ({"key_blocklist": {"a": 1}}, "must be a list"),
    ({"custom_rules": ["oops"]}, "must be a mapping"),
    ({"custom_rules": [{"name": "x"}]}, "missing pattern"),
    ({"custom_rules": [{"name": "x", "pattern": "a", "type": "magic"}]}, "type must be one of"),
])
def test_invalid_policies(raw, match):
    with pytest.raises(ValueError, match=match):
        policy_from_dict(raw)


def test_policy_must_be_a_mapping():
    with pytest.raises(ValueError):
        policy_from_dict(["email"])


def test_custom_rule_build():
    regex = CustomRule("order", r"ORD-\d+").build(None)
    assert isinstance(regex, RegexDetector)
    kv = CustomRule("sess", r"sess=(?P<val>\w+)", type="kv", ignore_case=True).build(None)
    assert isinstance(kv, KvDetector)
    assert kv.pattern.flags & re.IGNORECASE


def test_broken_custom_rule_fails_at_build_time():
    policy = policy_from_dict({"custom_rules": [{"name": "bad", "pattern": "(unclosed"}]})
    with pytest.raises(re.error):
        build_engine(policy)
    kv = policy_from_dict({"custom_rules": [{"name": "bad", "type": "kv", "pattern": "x=(\\w+)"}]})
    with pytest.raises(ValueError):
        build_engine(kv)


def test_build_engine_from_loaded_policy(tmp_path):
    policy = load_policy(_write(tmp_path, POLICY_YAML))
    engine = build_engine(policy)
    names = [d.name for d in engine.detectors]
    assert names == ["key_blocklist", "password_kv", "token_bearer", "email", "employee_id", "session"]
    assert engine.action is Action.MASK
    text = "x-auth-token=abc traceId=t1 SESSION=s1 EMP-123456 bob@example.com"
    assert engine.apply(text) == (
        "x-auth-token=[MASKED] traceId=t1 SESSION=[MASKED] [MASKED_EMPLOYEE] [MASKED_EMAIL]"
    )


def test_dry_run_policy_builds_warn_engine():
    assert build_engine(policy_from_dict({"mode": "dry-run"})).action is Action.WARN


def test_build_engine_without_policy():
    engine = build_engine()
    assert len(engine.detectors) == len(DetectorType) - 1
