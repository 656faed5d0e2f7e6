"""Detector pipeline builder.

Detectors are selected by type name in the policy file (`detectors: [...]`).
An empty selection means `default_types()`.

Canonical order (never randomized; it decides Finding order and which
replacement wins when two detectors produce the exact same span):
1. key policy enforcement (GenericKvBlocklistDetector) whenever the key policy
   has any allow/block entries, or when requested explicitly
2. key/value detectors (passwords, well-known tokens, cloud keys, basic auth)
3. connection/URL detectors (DB credentials, URLs)
4. token/header detectors
5. data format detectors (card, email, IBAN, IP)
6. private keys
7. custom rules, in the order given
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple
from .base import Detector
from .key_policy import KeyPolicy
from .detectors import (
    ApiTokenWellKnownDetector,
    BasicAuthDetector,
    CloudAccessKeyDetector,
    CreditCardDetector,
    DbCredentialDetector,
    EmailDetector,
    GenericKvBlocklistDetector,
    IbanDetector,
    IpDetector,
    PasswordKvDetector,
    PrivateKeyDetector,
    TokenDetector,
    UrlRedactorDetector,
)
from .detectors.db_credential import DEFAULT_DSN_HINTS, DEFAULT_MIN_SEMICOLONS


class DetectorType(str, Enum):
    KEY_BLOCKLIST = "key_blocklist"
    PASSWORD_KV = "password_kv"
    API_TOKEN_WELL_KNOWN = "api_token_well_known"
    CLOUD_ACCESS_KEY = "cloud_access_key"
    BASIC_AUTH = "basic_auth"
    DB_CREDENTIAL = "db_credential"
    URL_REDACTOR = "url_redactor"
    TOKEN_BEARER = "token_bearer"
    CREDIT_CARD = "credit_card"
    EMAIL = "email"
    IBAN = "iban"
    IP = "ip"
    PRIVATE_KEY = "private_key"

    @classmethod
    def parse(cls, raw) -> "DetectorType":
        if isinstance(raw, DetectorType):
            return raw
        key = str(raw).strip().lower().replace("-", "_")
        for t in cls:
            if t.value == key:
                return t
        raise ValueError(f"Unknown detector type: {raw!r}. Known: {[t.value for t in cls]}")


def default_types() -> Tuple[DetectorType, ...]:
    return tuple(t for t in DetectorType if t is not DetectorType.KEY_BLOCKLIST)


def parse_types(names: Optional[Iterable]) -> Tuple[DetectorType, ...]:
    """Parse type names, dropping duplicates but keeping first-seen order."""
    out: List[DetectorType] = []
    for n in names or ():
        t = DetectorType.parse(n)
        if t not in out:
            out.append(t)
    return tuple(out)


def build_pipeline(
    types: Optional[Iterable] = None,
    policy: Optional[KeyPolicy] = None,
    *,
    dsn_hints: Iterable[str] = DEFAULT_DSN_HINTS,
    dsn_min_semicolons: int = DEFAULT_MIN_SEMICOLONS,
    extra: Sequence[Detector] = (),
) -> Tuple[Detector, ...]:
    """Build the active detectors in canonical order.

    Args:
        types: requested detector types (names or DetectorType); empty/None means defaults
        policy: key policy shared by key/value detectors
        dsn_hints / dsn_min_semicolons: DbCredentialDetector DSN heuristic overrides
        extra: custom detectors appended after the built-ins
    """
    policy = policy if policy is not None else KeyPolicy()
    enabled = set(parse_types(types)) or set(default_types())

    out: List[Detector] = []
    if policy.has_rules or DetectorType.KEY_BLOCKLIST in enabled:
        out.append(GenericKvBlocklistDetector(policy))

    if DetectorType.PASSWORD_KV in enabled:
        out.append(PasswordKvDetector(policy))
    if DetectorType.API_TOKEN_WELL_KNOWN in enabled:
        out.append(ApiTokenWellKnownDetector())
    if DetectorType.CLOUD_ACCESS_KEY in enabled:
        out.append(CloudAccessKeyDetector(policy))
    if DetectorType.BASIC_AUTH in enabled:
        out.append(BasicAuthDetector())

    if DetectorType.DB_CREDENTIAL in enabled:
        out.append(DbCredentialDetector(policy, dsn_hints=dsn_hints, min_semicolons=dsn_min_semicolons))
    if DetectorType.URL_REDACTOR in enabled:
        out.append(UrlRedactorDetector())

    if DetectorType.TOKEN_BEARER in enabled:
        out.append(TokenDetector())

    if DetectorType.CREDIT_CARD in enabled:
        out.append(CreditCardDetector())
    if DetectorType.EMAIL in enabled:
        out.append(EmailDetector())
    if DetectorType.IBAN in enabled:
        out.append(IbanDetector())
    if DetectorType.IP in enabled:
        out.append(IpDetector())

    if DetectorType.PRIVATE_KEY in enabled:
        out.append(PrivateKeyDetector())

    out.extend(extra)
    return tuple(out)
