"""CLI entrypoint.

Commands:
- `logpurify redact [--policy policy.yaml] [--input app.log] [--output clean.log] [--findings findings.parquet]`
- `logpurify detectors`
- `logpurify policy-diff --a <file.yaml> --b <file.yaml>`

`redact` is line oriented: each input line is one message. Input defaults to
stdin and output to stdout; logs go to stderr.
"""

from __future__ import annotations
import argparse
import logging
import sys
from collections import Counter
from dataclasses import replace
from typing import List, Optional

from tqdm import tqdm

from .detect.base import Mode
from .detect.registry import DetectorType, default_types
from .logging_ import setup_logging
from .policies.loader import RedactionPolicy, load_policy
from .report import ParquetFindingsSink
from .sanitize import MessageSanitizer
from .tools.policy_diff import main as policy_diff_main

log = logging.getLogger("logpurify.cli")


def _open_in(path: Optional[str]):
    if not path or path == "-":
        return sys.stdin
    return open(path, "r", encoding="utf-8", errors="surrogateescape")


def _open_out(path: Optional[str]):
    if not path or path == "-":
        return sys.stdout
    return open(path, "w", encoding="utf-8", errors="surrogateescape")


def run_redact(args: argparse.Namespace) -> int:
    policy = load_policy(args.policy) if args.policy else RedactionPolicy()
    if args.mode:
        policy = replace(policy, mode=Mode.parse(args.mode))

    sink = ParquetFindingsSink(args.findings) if args.findings else None
    sanitizer = MessageSanitizer.from_policy(policy, reporter=sink)
    log.info(
        "redact mode=%s detectors=%s",
        policy.mode.value,
        ",".join(d.name for d in sanitizer.engine.detectors),
    )

    lines = changed = 0
    kinds: Counter = Counter()
    src = dst = None
    try:
        src = _open_in(args.input)
        dst = _open_out(args.output)
        show = not args.no_progress and sys.stderr.isatty()
        for line in tqdm(src, desc="redact", unit="line", disable=not show):
            body = line.rstrip("\n")
            result = sanitizer.sanitize_detailed(body, args.source)
            lines += 1
            if result.findings:
                kinds.update(f.kind for f in result.findings)
            if result.text != body:
                changed += 1
            dst.write(result.text + ("\n" if line.endswith("\n") else ""))
    finally:
        if dst is sys.stdout:
            dst.flush()
        elif dst is not None:
            dst.close()
        if src is not None and src is not sys.stdin:
            src.close()

    if sink is not None:
        written = sink.flush()
        log.info("findings written=%d path=%s", written, args.findings)
    summary = " ".join(f"{k}={v}" for k, v in sorted(kinds.items())) or "none"
    log.info("done lines=%d changed=%d findings: %s", lines, changed, summary)
    return 0


def run_detectors() -> int:
    defaults = set(default_types())
    for t in DetectorType:
        mark = "*" if t in defaults else " "
        print(f"{mark} {t.value}")
    print("(* = enabled when a policy lists no detectors)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="logpurify")
    p.add_argument("--log-level", default="INFO")
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("redact", help="Redact secrets from a file or stdin, line by line")
    pr.add_argument("--policy", help="Policy YAML (default: built-in defaults)")
    pr.add_argument("--input", "-i", help="Input file (default: stdin)")
    pr.add_argument("--output", "-o", help="Output file (default: stdout)")
    pr.add_argument("--findings", help="Append findings to this Parquet file")
    pr.add_argument("--mode", choices=[m.value for m in Mode], help="Override the policy mode")
    pr.add_argument("--source", help="Source/logger name recorded on findings")
    pr.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    sub.add_parser("detectors", help="List detector types")

    pd = sub.add_parser("policy-diff", help="Diff two policy files")
    pd.add_argument("--a", required=True)
    pd.add_argument("--b", required=True)

    args = p.parse_args(argv)
    setup_logging(level=args.log_level)

    if args.cmd == "policy-diff":
        print(policy_diff_main(args.a, args.b))
        return 0
    if args.cmd == "detectors":
        return run_detectors()
    return run_redact(args)


if __name__ == "__main__":
    sys.exit(main())
