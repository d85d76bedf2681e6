"""
OCN Notary request and result types.

SignableHeaders fixes the enumeration order of the OCPI headers that are
covered by a signature. Callers that build plain dicts instead must keep
the same order themselves, since it determines the field list.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Union


class VerificationError(str, Enum):
    """Reasons a verification can fail."""
    REQUEST_MODIFIED = "Request has been modified"
    SIGNATORIES_MISMATCH = "Signatories do not match"
    REWRITE_HASH_MISMATCH = "Rewritten request hash does not match"
    REWRITE_SIGNATORY_INCORRECT = "Rewritten signatory incorrect"


@dataclass
class VerifyResult:
    """Result of verifying an OCN Signature."""
    is_valid: bool
    error: Optional[str] = None

    @classmethod
    def valid(cls) -> 'VerifyResult':
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, error: Union[str, VerificationError]) -> 'VerifyResult':
        if isinstance(error, VerificationError):
            error = error.value
        return cls(is_valid=False, error=error)


@dataclass
class RewriteVerifyResult:
    """Result of verifying one rewrite; carries the rebuilt previous request."""
    is_valid: bool
    error: Optional[str] = None
    previous_values: Optional[Any] = None


@dataclass
class SignableHeaders:
    """OCPI request/response headers covered by an OCN Signature."""
    correlation_id: Optional[str] = None
    from_country_code: Optional[str] = None
    from_party_id: Optional[str] = None
    to_country_code: Optional[str] = None
    to_party_id: Optional[str] = None
    limit: Optional[str] = None
    total_count: Optional[str] = None
    link: Optional[str] = None
    location: Optional[str] = None

    HEADER_NAMES: ClassVar[Dict[str, str]] = {
        "correlation_id": "x-correlation-id",
        "from_country_code": "ocpi-from-country-code",
        "from_party_id": "ocpi-from-party-id",
        "to_country_code": "ocpi-to-country-code",
        "to_party_id": "ocpi-to-party-id",
        "limit": "x-limit",
        "total_count": "x-total-count",
        "link": "link",
        "location": "location",
    }

    def to_dict(self) -> Dict[str, str]:
        """Header name -> value, in signing order, without unset headers."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[self.HEADER_NAMES[f.name]] = value
        return out

    @classmethod
    def from_mapping(cls, headers: Mapping[str, Any]) -> 'SignableHeaders':
        """Pick the signable headers out of an HTTP header mapping (any case)."""
        lowered = {str(k).lower(): v for k, v in headers.items()}
        kwargs = {}
        for attr, name in cls.HEADER_NAMES.items():
            value = lowered.get(name)
            if value is not None:
                kwargs[attr] = str(value)
        return cls(**kwargs)


@dataclass
class ValuesToSign:
    """The parts of an OCPI request that are signed: headers, params, body."""
    headers: Optional[Union[SignableHeaders, Dict[str, Any]]] = None
    params: Optional[Dict[str, Any]] = None
    body: Any = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.headers is not None:
            if isinstance(self.headers, SignableHeaders):
                out["headers"] = self.headers.to_dict()
            else:
                out["headers"] = self.headers
        if self.params is not None:
            out["params"] = self.params
        if self.body is not None:
            out["body"] = self.body
        return out
