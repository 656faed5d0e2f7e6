"""IBAN detection with a growing window.

From each anchor (country code + 2 digits, not glued to a preceding letter or
digit) the candidate grows over letters, digits, dashes and whitespace. The
normalized form (upper-case, separators removed) is tested at every length in
[15, 34]; the first length that is plausible for the country *and* passes
MOD-97 wins, so the span is always the shortest valid IBAN. If nothing
validates, scanning resumes right after the anchor.
"""

from __future__ import annotations
import re
from typing import Dict, List
from ..base import Detector, DetectionResult, Span

ANCHOR_RE = re.compile(r"(?<![A-Za-z0-9])([A-Za-z]{2}[0-9]{2})")

MIN_LEN = 15
MAX_LEN = 34

KIND = "iban"
MASK = "[MASKED_IBAN]"

# Expected total length per country; unknown countries accept any length in range.
COUNTRY_LENGTH: Dict[str, int] = {
    "AD": 24, "AE": 23, "AL": 28, "AT": 20, "AZ": 28, "BA": 20, "BE": 16, "BG": 22,
    "BH": 22, "BR": 29, "BY": 28, "CH": 21, "CR": 22, "CY": 28, "CZ": 24, "DE": 22,
    "DK": 18, "DO": 28, "EE": 20, "EG": 29, "ES": 24, "FI": 18, "FO": 18, "FR": 27,
    "GB": 22, "GE": 22, "GI": 23, "GL": 18, "GR": 27, "GT": 28, "HR": 21, "HU": 28,
    "IE": 22, "IL": 23, "IQ": 23, "IS": 26, "IT": 27, "JO": 30, "KW": 30, "KZ": 20,
    "LB": 28, "LC": 32, "LI": 21, "LT": 20, "LU": 20, "LV": 21, "MC": 27, "MD": 24,
    "ME": 22, "MK": 19, "MR": 27, "MT": 31, "MU": 30, "NL": 18, "NO": 15, "PK": 24,
    "PL": 28, "PS": 29, "PT": 25, "QA": 29, "RO": 24, "RS": 22, "SA": 24, "SC": 31,
    "SE": 24, "SI": 19, "SK": 24, "SM": 27, "TL": 23, "TN": 24, "TR": 26, "UA": 29,
    "VG": 24, "XK": 20,
}


def _is_ascii_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _is_iban_char(ch: str) -> bool:
    return _is_ascii_alnum(ch) or ch == "-" or ch.isspace()


def is_plausible(iban: List[str]) -> bool:
    if not MIN_LEN <= len(iban) <= MAX_LEN:
        return False
    if not (iban[0].isalpha() and iban[1].isalpha()):
        return False
    expected = COUNTRY_LENGTH.get(iban[0] + iban[1])
    return expected is None or expected == len(iban)


def mod97_ok(iban: List[str]) -> bool:
    """ISO 7064 MOD-97-10 over the rearranged IBAN (first four chars moved to the end)."""
    rem = 0
    for ch in iban[4:] + iban[:4]:
        if "0" <= ch <= "9":
            rem = (rem * 10 + ord(ch) - 48) % 97
        else:
            v = ord(ch) - ord("A") + 10
            rem = (rem * 10 + v // 10) % 97
            rem = (rem * 10 + v % 10) % 97
    return rem == 1


class IbanDetector(Detector):
    name = "iban"

    def detect(self, text):
        if not text:
            return DetectionResult.empty()
        spans = []
        n = len(text)
        pos = 0
        while True:
            m = ANCHOR_RE.search(text, pos)
            if m is None:
                break
            start, i = m.start(1), m.end(1)
            norm = list(m.group(1).upper())
            best_end = -1
            while i < n and _is_iban_char(text[i]):
                ch = text[i]
                if _is_ascii_alnum(ch):
                    norm.append(ch.upper())
                size = len(norm)
                if size > MAX_LEN:
                    break
                if size >= MIN_LEN and _is_ascii_alnum(ch) and is_plausible(norm) and mod97_ok(norm):
                    best_end = i + 1
                    break
                i += 1
            if best_end != -1:
                spans.append(Span(start, best_end, KIND, MASK))
                pos = best_end
            else:
                pos = m.end(1)
        return DetectionResult.of(spans)
