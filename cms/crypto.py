"""
Symmetric encryption helpers for passwords and API secrets.

Passwords and API secrets are stored encrypted (not hashed) with a single
32-byte secret (`AUTH_SECRET`), since the API secret has to be shown back to
its owner on the API key page. Keep the secret out of version control!

The secret becomes a Fernet key: its first 16 bytes sign each token with
HMAC-SHA256 and its last 16 bytes encrypt the text with AES-128 in CBC mode.
"""
import base64
import hmac
import secrets

from cryptography.fernet import Fernet, InvalidToken


def _fernet(key: str) -> Fernet:
    key_bytes = key.encode('utf-8')
    if len(key_bytes) != 32:
        raise ValueError('The encryption key must be exactly 32 bytes long.')
    return Fernet(base64.urlsafe_b64encode(key_bytes))


def encrypt_text(text: str, key: str) -> str:
    """Encrypt `text` with the 32-byte `key`.

    A random initialization vector is used for each call, so encrypting the
    same text twice gives two different tokens.
    """
    return _fernet(key).encrypt(text.encode('utf-8')).decode('ascii')


def decrypt_text(token: str, key: str) -> str:
    """Decrypt a token created by `encrypt_text()` with the same `key`."""
    try:
        return _fernet(key).decrypt(token.encode('ascii')).decode('utf-8')
    except (InvalidToken, UnicodeEncodeError) as e:
        raise ValueError('Unable to decrypt the text with the given key.') from e


def strings_match(first: str, second: str) -> bool:
    """Compare two strings in constant time."""
    return hmac.compare_digest(first.encode('utf-8'), second.encode('utf-8'))


def generate_token() -> str:
    return secrets.token_urlsafe(32)
