"""
Encryption envelope for project files.

Project data files are AES-128-CBC encrypted with PKCS7 padding, using the
same fixed 16-byte constant as key and IV.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .config import config
from .errors import EnvelopeError

BLOCK_SIZE_BITS = 128


def _cipher(key: Optional[bytes]) -> Cipher:
    key = key if key is not None else config.envelope_key
    if len(key) != 16:
        raise EnvelopeError(f"Envelope key must be 16 bytes, got {len(key)}")
    return Cipher(algorithms.AES(key), modes.CBC(key))


def decrypt(data: bytes, key: Optional[bytes] = None) -> bytes:
    """
    Decrypt the contents of a project file.

    Args:
        data: The encrypted bytes
        key: Override for the configured envelope key

    Returns:
        The plaintext bytes

    Raises:
        EnvelopeError: If the data is not a whole number of blocks or the padding is invalid
    """
    decryptor = _cipher(key).decryptor()
    unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
    try:
        padded = decryptor.update(data) + decryptor.finalize()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise EnvelopeError(f"Failed to decrypt data: {e}") from e


def encrypt(data: bytes, key: Optional[bytes] = None) -> bytes:
    """Encrypt plaintext bytes; the exact inverse of ``decrypt``."""
    padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
    encryptor = _cipher(key).encryptor()
    padded = padder.update(data) + padder.finalize()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt_file(path: Union[str, Path], key: Optional[bytes] = None) -> bytes:
    """Read and decrypt a project file."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise EnvelopeError(f"Failed to read {path}: {e}") from e

    logging.info(f"Decrypting {path} ({len(data)} bytes)")
    return decrypt(data, key)


def encrypt_file(path: Union[str, Path], data: bytes, key: Optional[bytes] = None) -> None:
    """Encrypt ``data`` and write it to ``path``."""
    path = Path(path)
    encrypted = encrypt(data, key)
    try:
        path.write_bytes(encrypted)
    except OSError as e:
        raise EnvelopeError(f"Failed to write {path}: {e}") from e

    logging.info(f"Wrote encrypted {path} ({len(encrypted)} bytes)")
