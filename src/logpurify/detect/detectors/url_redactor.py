"""Redacts everything after `scheme://` for an explicit list of schemes.

    jdbc:postgresql://db.prod/app            -> jdbc:postgresql://[MASKED_URL]
    mongodb://cluster0.example.com/db?x=1    -> mongodb://[MASKED_URL]
    s3://my-bucket/private/path              -> s3://[MASKED_URL]

Userinfo is left to DbCredentialDetector; when both fire, the URL span wins
at merge time because it starts earlier and covers the credentials.
"""

from __future__ import annotations
import re
from ..base import NOT_PLACEHOLDER, Detector, DetectionResult, Span

SCHEMES = (
    r"jdbc:(?:postgresql|mysql|mariadb|sqlserver|h2)",
    r"postgres(?:ql)?",
    r"mysql",
    r"mariadb",
    r"sqlserver",
    r"mongodb(?:\+srv)?",
    r"rediss?",
    r"amqp",
    r"kafka",
    r"clickhouse",
    r"neo4j",
    r"cassandra",
    r"https?",
    r"ftp",
    r"s3",
    r"gs",
)

URL_RE = re.compile(
    r"\b(" + "|".join(SCHEMES) + r")://" + NOT_PLACEHOLDER + r"([^\s\"')\]]+)",
    re.IGNORECASE,
)

KIND = "url"
MASK = "[MASKED_URL]"

class UrlRedactorDetector(Detector):
    name = "url_redactor"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        return DetectionResult.of(Span(m.start(2), m.end(2), KIND, MASK) for m in URL_RE.finditer(text))
