"""Built-in detectors."""

from .api_token import ApiTokenWellKnownDetector
from .basic_auth import BasicAuthDetector
from .cloud_access_key import CloudAccessKeyDetector
from .credit_card import CreditCardDetector
from .custom import KvDetector, RegexDetector
from .db_credential import DbCredentialDetector
from .email import EmailDetector
from .generic_kv import GenericKvBlocklistDetector
from .iban import IbanDetector
from .ip import IpDetector
from .password_kv import PasswordKvDetector
from .private_key import PrivateKeyDetector
from .token import TokenDetector
from .url_redactor import UrlRedactorDetector

__all__ = [
    "ApiTokenWellKnownDetector",
    "BasicAuthDetector",
    "CloudAccessKeyDetector",
    "CreditCardDetector",
    "DbCredentialDetector",
    "EmailDetector",
    "GenericKvBlocklistDetector",
    "IbanDetector",
    "IpDetector",
    "KvDetector",
    "PasswordKvDetector",
    "PrivateKeyDetector",
    "RegexDetector",
    "TokenDetector",
    "UrlRedactorDetector",
]
