"""Policy diff tool.

Compares two redaction policy files and prints a structured diff.

Usage:
`logpurify policy-diff --a policies/prod.yaml --b policies/prod_v2.yaml`

Both files are normalized first (kebab/snake keys unified, key lists
normalized the same way KeyPolicy does and sorted, detector names resolved),
so cosmetic edits such as `X-Auth-Token` -> `x_auth_token` do not show up.
"""

from __future__ import annotations
from dataclasses import asdict
from typing import Any, Dict, List, Tuple

from ..detect.key_policy import normalize_key
from ..policies.loader import RedactionPolicy, load_policy

DiffRow = Tuple[str, str, Any, Any]


def normalized(policy: RedactionPolicy) -> Dict[str, Any]:
    d = asdict(policy)
    d["mode"] = policy.mode.value
    d["detectors"] = sorted(t.value for t in policy.detectors) or ["<defaults>"]
    d["key_allowlist"] = sorted({normalize_key(k) for k in policy.key_allowlist})
    d["key_blocklist"] = sorted({normalize_key(k) for k in policy.key_blocklist})
    d["dsn_hints"] = sorted(policy.dsn_hints)
    d["custom_rules"] = {r["name"]: r for r in d["custom_rules"]}
    return d


def diff(a: Any, b: Any, prefix: str = "") -> List[DiffRow]:
    """Return list of (path, change_type, old, new)."""
    out: List[DiffRow] = []
    if isinstance(a, dict) and isinstance(b, dict):
        for k in sorted(set(a) | set(b), key=str):
            pfx = f"{prefix}.{k}" if prefix else str(k)
            if k not in a:
                out.append((pfx, "added", None, b[k]))
            elif k not in b:
                out.append((pfx, "removed", a[k], None))
            else:
                out.extend(diff(a[k], b[k], pfx))
    elif isinstance(a, list) and isinstance(b, list):
        added = [x for x in b if x not in a]
        removed = [x for x in a if x not in b]
        for x in added:
            out.append((prefix, "added", None, x))
        for x in removed:
            out.append((prefix, "removed", x, None))
    elif a != b:
        out.append((prefix, "changed", a, b))
    return out


def render(rows: List[DiffRow]) -> str:
    lines = []
    for path, typ, old, new in rows:
        if typ == "added":
            lines.append(f"+ {path}: {new}")
        elif typ == "removed":
            lines.append(f"- {path}: {old}")
        else:
            lines.append(f"~ {path}: {old} -> {new}")
    return "\n".join(lines)


def main(a_path: str, b_path: str) -> str:
    a = normalized(load_policy(a_path))
    b = normalized(load_policy(b_path))
    return render(diff(a, b))
