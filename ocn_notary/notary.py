"""
OCN Notary

Signs OCPI requests and verifies OCN Signatures, including the chain of
rewrites added by relaying nodes that had to overwrite request fields.

Usage:
    notary = Notary()
    notary.sign({"headers": headers, "body": body}, private_key)
    header_value = notary.serialize()

    received = Notary.deserialize(header_value)
    result = received.verify({"headers": headers, "body": body})
    if not result.is_valid:
        reject(result.error)

A relaying node that must change a field stashes the original value
before re-signing:

    notary.stash({"$['body']['response_url']": original_url})
    notary.sign(modified_request, node_private_key)
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .canonicalization import message_for, to_tree, walk
from .codec import decode_header, encode_header
from .crypto import PrivateKey, address_of, keccak_hex, recover_signer, same_address, sign_hash
from .exceptions import RewriteChainError, SignatureFormatError
from .logging_config import audit_log, correlation_scope
from .models import VerificationError, VerifyResult
from .paths import ROOT
from .rewrite import Rewrite

logger = logging.getLogger(__name__)


@dataclass
class Notary:
    """
    An OCN Signature.

    Attributes:
        fields: JsonPaths of the signed values, in signing order
        hash: keccak-256 of the concatenated values (the signed value)
        rsv: r + s + v signature as a 0x-prefixed 130 hex character string
        signatory: checksum address of the signer
        rewrites: earlier signatures, oldest first, each holding the
            original values of the fields overwritten since
    """
    fields: List[str] = field(default_factory=list)
    hash: str = ""
    rsv: str = ""
    signatory: str = ""
    rewrites: List[Rewrite] = field(default_factory=list)

    # ============================================================
    # Signing
    # ============================================================

    def sign(self, values_to_sign: Any, private_key: PrivateKey) -> 'Notary':
        """
        Sign a request, replacing fields, hash, rsv and signatory.

        Rewrites are left untouched; call stash() before signing a
        modified request.

        Args:
            values_to_sign: {"headers": ..., "params": ..., "body": ...}
                or a ValuesToSign
            private_key: Ethereum private key

        Raises:
            SigningError: if the private key is malformed
        """
        tree = to_tree(values_to_sign)
        fields, message = walk(ROOT, tree)
        message_hash = keccak_hex(message)
        rsv = sign_hash(message_hash, private_key)
        signatory = address_of(private_key)

        self.fields, self.hash, self.rsv, self.signatory = fields, message_hash, rsv, signatory

        with correlation_scope(_correlation_id(tree)):
            audit_log.request_signed(signatory, message_hash, len(fields))
        return self

    def stash(self, rewritten_fields: Mapping[str, Any]) -> 'Notary':
        """
        Record the current signature before fields get overwritten.

        Args:
            rewritten_fields: JsonPath -> original value, for every field
                about to be overwritten, e.g. {"$['body']['id']": "LOC1"}
        """
        self.rewrites.append(Rewrite(rewritten_fields, self.hash, self.rsv, self.signatory))
        audit_log.rewrite_stashed(self.signatory, list(rewritten_fields), len(self.rewrites))
        return self

    # ============================================================
    # Verification
    # ============================================================

    def verify(self, values_to_verify: Any) -> VerifyResult:
        """
        Verify the signature and every rewrite against a received request.

        Steps:
        1. Rebuild the message from the stored fields and compare hashes
        2. Recover the signer and compare with the signatory
        3. Walk the rewrites newest first, rebuilding each previous request

        Returns:
            VerifyResult; error holds the reason when invalid

        Raises:
            RewriteChainError: if a rewrite verifies without returning the
                rebuilt request
        """
        tree = to_tree(values_to_verify)
        result = self._verify(tree)
        with correlation_scope(_correlation_id(tree)):
            if result.is_valid:
                audit_log.verification_passed(self.signatory, len(self.rewrites))
            else:
                audit_log.verification_failed(self.signatory, result.error)
        return result

    def _verify(self, tree: Any) -> VerifyResult:
        # 1. recreate message/hash from the stored fields
        if keccak_hex(message_for(self.fields, tree)) != self.hash:
            return VerifyResult.invalid(VerificationError.REQUEST_MODIFIED)

        # 2. verify signer of message
        if not same_address(recover_signer(self.hash, self.rsv), self.signatory):
            return VerifyResult.invalid(VerificationError.SIGNATORIES_MISMATCH)

        # 3. verify rewrites, newest first
        current = tree
        for index, rewrite in enumerate(reversed(self.rewrites)):
            outcome = rewrite.verify(self.fields, current)
            if not outcome.is_valid:
                return VerifyResult.invalid(f"Rewrite {index}: {outcome.error}")
            if outcome.previous_values is None:
                raise RewriteChainError(
                    f"Rewrite {index}: previous values missing in rewrite verification"
                )
            current = outcome.previous_values

        return VerifyResult.valid()

    # ============================================================
    # Serialization
    # ============================================================

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation; key order is part of the format."""
        return {
            "fields": list(self.fields),
            "hash": self.hash,
            "rsv": self.rsv,
            "signatory": self.signatory,
            "rewrites": [r.to_dict() for r in self.rewrites],
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'Notary':
        """
        Build a Notary from its wire representation.

        Raises:
            SignatureFormatError: if the document has the wrong shape
        """
        if not isinstance(data, dict):
            raise SignatureFormatError("signature", "must be a JSON object")

        fields = data.get("fields")
        if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
            raise SignatureFormatError("fields", "must be a list of strings")

        for name in ("hash", "rsv", "signatory"):
            if not isinstance(data.get(name), str):
                raise SignatureFormatError(name, "must be a string")

        rewrites = data.get("rewrites")
        if rewrites is None:
            rewrites = []
        if not isinstance(rewrites, list):
            raise SignatureFormatError("rewrites", "must be a list")

        return cls(
            fields=list(fields),
            hash=data["hash"],
            rsv=data["rsv"],
            signatory=data["signatory"],
            rewrites=[Rewrite.from_dict(r) for r in rewrites],
        )

    def serialize(self) -> str:
        """Encode as an OCN-Signature header value: base64(brotli(json))."""
        payload = json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False)
        return encode_header(payload.encode('utf-8'))

    @classmethod
    def deserialize(cls, header: str) -> 'Notary':
        """
        Decode an OCN-Signature header value.

        Raises:
            SignatureFormatError: if the header cannot be decoded
        """
        payload = decode_header(header)
        try:
            data = json.loads(payload.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            audit_log.header_rejected("signature", "json")
            raise SignatureFormatError("signature", "must be UTF-8 JSON") from e

        try:
            return cls.from_dict(data)
        except SignatureFormatError as e:
            audit_log.header_rejected(e.field, e.message)
            raise


def _correlation_id(tree: Any) -> Any:
    headers = tree.get("headers") if isinstance(tree, dict) else None
    if isinstance(headers, dict):
        return headers.get("x-correlation-id")
    return None
