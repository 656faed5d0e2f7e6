"""Finding reporters.

Reporters receive the findings of one sanitized message. They never see the
original text or the matched values, only kinds and offsets.

- NoopReporter: default
- LoggingReporter: one log line per message with per-kind counts
- ParquetFindingsSink: buffers rows and appends them to a Parquet file on flush()
  (append = read existing table, concat, rewrite; fine for audit-sized volumes)
"""

from __future__ import annotations
import logging
import os
import threading
import time
from abc import ABC, abstractmethod
from collections import Counter
from typing import Any, Dict, List, Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from .detect.base import Finding

log = logging.getLogger("logpurify.report")


class Reporter(ABC):
    @abstractmethod
    def report(self, findings: Sequence[Finding]) -> None:
        ...


class NoopReporter(Reporter):
    def report(self, findings: Sequence[Finding]) -> None:
        pass


class LoggingReporter(Reporter):
    def __init__(self, logger: logging.Logger = log, level: int = logging.INFO):
        self.logger = logger
        self.level = level

    def report(self, findings: Sequence[Finding]) -> None:
        if not findings:
            return
        counts = Counter(f.kind for f in findings)
        source = findings[0].source or "-"
        summary = " ".join(f"{k}={v}" for k, v in sorted(counts.items()))
        self.logger.log(self.level, "redacted source=%s action=%s %s", source, findings[0].action.value, summary)


def findings_schema() -> pa.Schema:
    return pa.schema([
        ("source", pa.string()),
        ("kind", pa.string()),
        ("action", pa.string()),
        ("start", pa.int64()),
        ("end", pa.int64()),
        ("timestamp_ms", pa.int64()),
    ], metadata={"schema_version": "v1"})


class ParquetFindingsSink(Reporter):
    def __init__(self, path: str):
        self.path = path
        self._rows: List[Dict[str, Any]] = []
        self._lock = threading.Lock()
        # held across read-concat-write of the file
        self._write_lock = threading.Lock()
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    def report(self, findings: Sequence[Finding]) -> None:
        ts = int(time.time() * 1000)
        rows = [{
            "source": f.source,
            "kind": f.kind,
            "action": f.action.value,
            "start": f.start,
            "end": f.end,
            "timestamp_ms": ts,
        } for f in findings]
        with self._lock:
            self._rows.extend(rows)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._rows)

    def flush(self) -> int:
        """Write buffered rows; returns the number of rows written."""
        with self._lock:
            rows, self._rows = self._rows, []
        if not rows:
            return 0
        schema = findings_schema()
        table = pa.Table.from_pylist(rows, schema=schema)
        with self._write_lock:
            if os.path.exists(self.path):
                if os.path.getsize(self.path) == 0:
                    os.remove(self.path)
                else:
                    existing = pq.read_table(self.path).cast(schema)
                    table = pa.concat_tables([existing, table])
            pq.write_table(table, self.path, compression="zstd")
        log.debug("wrote %d findings to %s", len(rows), self.path)
        return len(rows)
