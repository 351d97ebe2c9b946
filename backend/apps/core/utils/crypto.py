"""
Encryption helpers for secrets stored in the database.

AES-256-GCM; the stored form is base64(IV + ciphertext + tag).
"""

import base64
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from django.conf import settings


class EncryptionError(Exception):
    """Raised when a value cannot be encrypted or decrypted"""
    pass


IV_LENGTH = 12  # 96 bits, recommended for GCM
TAG_LENGTH = 16
KEY_LENGTH = 32  # AES-256


def get_key() -> bytes:
    """
    Derive a 32-byte key from settings.ENCRYPTION_KEY.
    Keys of any other length are hashed with SHA-256.
    """
    key = settings.ENCRYPTION_KEY.encode()
    if len(key) != KEY_LENGTH:
        return hashlib.sha256(key).digest()
    return key


def encrypt(text: str) -> str:
    """
    Encrypt a string with AES-256-GCM.

    Raises:
        EncryptionError: If the input is empty or not a string
    """
    if not isinstance(text, str) or not text:
        raise EncryptionError('Cannot encrypt empty or non-string value')

    iv = os.urandom(IV_LENGTH)
    ciphertext = AESGCM(get_key()).encrypt(iv, text.encode('utf-8'), None)
    return base64.b64encode(iv + ciphertext).decode('ascii')


def decrypt(text: str) -> str:
    """
    Decrypt a value produced by encrypt().

    Raises:
        EncryptionError: If the value is malformed or was tampered with
    """
    if not isinstance(text, str) or not text:
        raise EncryptionError('Cannot decrypt empty or non-string value')

    try:
        data = base64.b64decode(text, validate=True)
    except ValueError:
        raise EncryptionError('Invalid encrypted text format: not valid base64')

    if len(data) < IV_LENGTH + 1 + TAG_LENGTH:
        raise EncryptionError('Invalid encrypted text format: data too short')

    try:
        plaintext = AESGCM(get_key()).decrypt(data[:IV_LENGTH], data[IV_LENGTH:], None)
    except InvalidTag:
        raise EncryptionError('Decryption failed: data integrity check failed')

    return plaintext.decode('utf-8')


def is_encrypted(text: str) -> bool:
    """Check whether a string has the shape of an encrypt() result"""
    if not text or not isinstance(text, str):
        return False
    try:
        data = base64.b64decode(text, validate=True)
    except ValueError:
        return False
    return len(data) >= IV_LENGTH + 1 + TAG_LENGTH
