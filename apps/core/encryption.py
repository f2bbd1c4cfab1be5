# apps/core/encryption.py
"""
Per-user encryption of sensitive text fields.

AES-256-GCM with a key derived from ENCRYPTION_MASTER_KEY by PBKDF2-HMAC-SHA256
(salt = user id). Stored format: base64(iv):base64(tag):base64(ciphertext).
"""
import base64
import binascii
import logging
import os
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

ITERATIONS = 100_000
KEY_LENGTH = 32
IV_LENGTH = 16
TAG_LENGTH = 16


def _master_key() -> str:
    key = settings.ENCRYPTION_MASTER_KEY or ''
    if key and len(key) < 32:
        raise ImproperlyConfigured("ENCRYPTION_MASTER_KEY must be at least 32 characters long")
    return key


def is_enabled() -> bool:
    return bool(_master_key())


@lru_cache(maxsize=256)
def _derive_key(master_key: str, user_id: str) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=user_id.encode('utf-8'),
        iterations=ITERATIONS,
    )
    return kdf.derive(master_key.encode('utf-8'))


def encrypt(text, user_id):
    """Encrypts text for the given user. Empty values pass through."""
    if not text or not is_enabled():
        return text

    key = _derive_key(_master_key(), str(user_id))
    iv = os.urandom(IV_LENGTH)
    sealed = AESGCM(key).encrypt(iv, text.encode('utf-8'), None)
    ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]

    return ':'.join(base64.b64encode(part).decode('ascii') for part in (iv, tag, ciphertext))


def decrypt(value, user_id):
    """
    Decrypts a stored value.

    Anything that is not in the stored format, or fails authentication, is
    returned unchanged so rows written before encryption was enabled still read.
    """
    if not value or not is_enabled():
        return value

    parts = value.split(':')
    if len(parts) != 3:
        return value

    try:
        iv, tag, ciphertext = (base64.b64decode(p, validate=True) for p in parts)
    except (binascii.Error, ValueError):
        return value

    if len(iv) != IV_LENGTH or len(tag) != TAG_LENGTH:
        return value

    key = _derive_key(_master_key(), str(user_id))
    try:
        plain = AESGCM(key).decrypt(iv, ciphertext + tag, None)
    except InvalidTag:
        logger.warning("Decryption failed for user %s, returning stored value", user_id)
        return value

    return plain.decode('utf-8')


def encrypt_fields(data: dict, fields, user_id) -> dict:
    result = dict(data)
    for name in fields:
        if result.get(name):
            result[name] = encrypt(result[name], user_id)
    return result


def decrypt_fields(data: dict, fields, user_id) -> dict:
    result = dict(data)
    for name in fields:
        if result.get(name):
            result[name] = decrypt(result[name], user_id)
    return result
