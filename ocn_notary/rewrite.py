"""
OCN Notary Rewrite

A Rewrite is the state of a Notary just before a relaying node overwrote
some request fields and re-signed: the original values of the overwritten
fields, and the previous hash, signature and signatory.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from .canonicalization import message_for, to_tree
from .crypto import keccak_hex, recover_signer, same_address
from .exceptions import SignatureFormatError
from .models import RewriteVerifyResult, VerificationError
from .paths import assign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rewrite:
    """
    One custody transfer.

    Attributes:
        rewritten_fields: JsonPath -> value before it was overwritten,
            e.g. {"$['body']['id']": "LOC1"}
        hash: message hash signed before the overwrite
        rsv: signature before the overwrite
        signatory: signer before the overwrite
    """
    rewritten_fields: Dict[str, Any]
    hash: str
    rsv: str
    signatory: str

    def __post_init__(self):
        # owned plain JSON tree
        object.__setattr__(self, "rewritten_fields", to_tree(dict(self.rewritten_fields)))

    def verify(self, fields: List[str], modified_values: Any) -> RewriteVerifyResult:
        """
        Verify this rewrite against the request as it looks after the
        overwrite.

        Args:
            fields: field list of the enclosing Notary (signing order)
            modified_values: the newer request; never mutated

        Returns:
            RewriteVerifyResult; when valid, previous_values holds the
            rebuilt request this rewrite's signatory signed
        """
        # 1. rebuild the previous request on an owned copy
        previous = to_tree(modified_values)
        for path, value in self.rewritten_fields.items():
            if not assign(previous, path, copy.deepcopy(value)):
                logger.debug("Rewritten field %s does not fit the request", path)

        # 2. stashed hash must match the rebuilt request
        if keccak_hex(message_for(fields, previous)) != self.hash:
            return RewriteVerifyResult(False, VerificationError.REWRITE_HASH_MISMATCH.value)

        # 3. stashed signatory must have signed the stashed hash
        if not same_address(recover_signer(self.hash, self.rsv), self.signatory):
            return RewriteVerifyResult(False, VerificationError.REWRITE_SIGNATORY_INCORRECT.value)

        return RewriteVerifyResult(True, previous_values=previous)

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation; key order is part of the format."""
        return {
            "rewrittenFields": dict(self.rewritten_fields),
            "hash": self.hash,
            "rsv": self.rsv,
            "signatory": self.signatory,
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'Rewrite':
        if not isinstance(data, dict):
            raise SignatureFormatError("rewrites", "entries must be objects")
        rewritten = data.get("rewrittenFields")
        if not isinstance(rewritten, dict):
            raise SignatureFormatError("rewrittenFields", "must be an object")
        for name in ("hash", "rsv", "signatory"):
            if not isinstance(data.get(name), str):
                raise SignatureFormatError(f"rewrites.{name}", "must be a string")
        return cls(
            rewritten_fields=rewritten,
            hash=data["hash"],
            rsv=data["rsv"],
            signatory=data["signatory"],
        )
