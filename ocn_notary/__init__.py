"""
OCN Notary

Version: 1.0.0
License: Apache 2.0

Signs and verifies OCPI requests relayed over the Open Charging Network.

A request (headers, params, body) is flattened into an ordered list of
JsonPath fields and a concatenated message, hashed with keccak-256 and
personal-signed with a secp256k1 key. Relaying nodes that overwrite fields
stash the previous signature together with the original values, so the
recipient can verify the whole custody chain.

Usage:
    from ocn_notary import Notary

    notary = Notary()
    notary.sign(request, private_key)
    header = notary.serialize()

    result = Notary.deserialize(header).verify(request)
    assert result.is_valid, result.error
"""

__version__ = "1.0.0"
__license__ = "Apache-2.0"

# Canonicalization
from .canonicalization import (
    walk,
    canonicalize,
    canonical_string,
    message_for,
    to_tree,
)
from .paths import ROOT, parse_path, resolve, assign

# Cryptographic primitives
from .crypto import (
    keccak_hex,
    sign_hash,
    recover_signer,
    address_of,
    to_checksum,
    same_address,
)

# Notary
from .notary import Notary
from .rewrite import Rewrite
from .models import (
    SignableHeaders,
    ValuesToSign,
    VerifyResult,
    RewriteVerifyResult,
    VerificationError,
)

# Header codec
from .codec import compress, decompress, encode_header, decode_header
from .config import SIGNATURE_HEADER

# Errors
from .exceptions import (
    NotaryError,
    SignatureFormatError,
    SigningError,
    RewriteChainError,
)


__all__ = [
    # Version
    "__version__",

    # Canonicalization
    "walk",
    "canonicalize",
    "canonical_string",
    "message_for",
    "to_tree",
    "ROOT",
    "parse_path",
    "resolve",
    "assign",

    # Crypto
    "keccak_hex",
    "sign_hash",
    "recover_signer",
    "address_of",
    "to_checksum",
    "same_address",

    # Notary
    "Notary",
    "Rewrite",
    "SignableHeaders",
    "ValuesToSign",
    "VerifyResult",
    "RewriteVerifyResult",
    "VerificationError",

    # Codec
    "compress",
    "decompress",
    "encode_header",
    "decode_header",
    "SIGNATURE_HEADER",

    # Errors
    "NotaryError",
    "SignatureFormatError",
    "SigningError",
    "RewriteChainError",
]
