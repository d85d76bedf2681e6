"""
OCN Notary cryptographic primitives.

secp256k1 ECDSA with the Ethereum "personal message" (EIP-191) convention,
keccak-256 hashing and EIP-55 checksum addresses, via eth-account and
eth-utils.

The value that gets personal-signed is the UTF-8 text of the "0x"-prefixed
hex hash, not the raw 32 digest bytes. Signatures issued by the other
notary ports depend on this.
"""

import logging
from typing import Optional, Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import keccak, to_checksum_address

from .exceptions import SigningError

logger = logging.getLogger(__name__)

PrivateKey = Union[str, bytes]

_PRIMITIVE_ERRORS = (ValueError, TypeError, BadSignature, ValidationError)


def keccak_hex(data: Union[bytes, str]) -> str:
    """Keccak-256 of UTF-8 bytes as a lowercase "0x"-prefixed hex string."""
    if isinstance(data, str):
        data = data.encode('utf-8')
    return "0x" + keccak(data).hex()


def sign_hash(message_hash: str, private_key: PrivateKey) -> str:
    """
    Personal-sign a hash string.

    Returns:
        "0x" + r (32 bytes) + s (32 bytes) + v (1 byte), as hex
    """
    try:
        signed = Account.sign_message(encode_defunct(text=message_hash), private_key=private_key)
    except _PRIMITIVE_ERRORS as e:
        raise SigningError(f"Private key rejected: {e}") from e
    return "0x" + bytes(signed.signature).hex()


def address_of(private_key: PrivateKey) -> str:
    """Checksum address belonging to a private key."""
    try:
        return Account.from_key(private_key).address
    except _PRIMITIVE_ERRORS as e:
        raise SigningError(f"Private key rejected: {e}") from e


def recover_signer(message_hash: str, rsv: str) -> Optional[str]:
    """
    Recover the checksum address that personal-signed a hash string.

    Returns None if the signature is malformed or cannot be recovered.
    """
    try:
        return Account.recover_message(encode_defunct(text=message_hash), signature=rsv)
    except _PRIMITIVE_ERRORS as e:
        logger.debug("Could not recover signer: %s", e)
        return None


def to_checksum(address: str) -> str:
    """EIP-55 checksum form of an address. Raises ValueError if malformed."""
    return to_checksum_address(address)


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    """Compare two addresses in checksum form; malformed addresses never match."""
    if not a or not b:
        return False
    try:
        return to_checksum(a) == to_checksum(b)
    except (ValueError, TypeError):
        return False
