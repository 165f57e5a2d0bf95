"""
PEM codec for RSA key material.

Private keys are PKCS#1 ("RSA PRIVATE KEY"), public keys are
SubjectPublicKeyInfo ("PUBLIC KEY"). The output is safe to write
straight to a .pem file for use with OpenSSL.
"""
import base64
import binascii
import re
import textwrap

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from core.domain.exceptions import KeyFormatError

PRIVATE_KEY_TYPE = "RSA PRIVATE KEY"
PUBLIC_KEY_TYPE = "PUBLIC KEY"
LINE_LENGTH = 64

_MARKER_LINE = re.compile(r"(?m)^-----(BEGIN|END) .*?-----\r?\n?")


def extract_base64(text: str) -> str:
    """
    Strip BEGIN/END marker lines and whitespace from PEM text.

    Text without markers is returned stripped of whitespace only.

    Args:
        text: PEM text

    Returns:
        Base64 body
    """
    body = _MARKER_LINE.sub("", text or "")
    return body.replace("\r", "").replace("\n", "").replace(" ", "")


def _decode_body(text: str) -> bytes:
    try:
        return base64.b64decode(extract_base64(text), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise KeyFormatError(f"Key is not valid base64: {exc}") from exc


def decode_private_key(pem_text: str) -> rsa.RSAPrivateKey:
    """
    Decode PEM text into an RSA private key.

    Args:
        pem_text: PEM-encoded private key

    Returns:
        RSA private key

    Raises:
        KeyFormatError: If the text is not an RSA private key
    """
    der = _decode_body(pem_text)
    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Invalid private key: {exc}") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyFormatError("Private key is not an RSA key")
    return key


def decode_public_key(pem_text: str) -> rsa.RSAPublicKey:
    """
    Decode PEM text into an RSA public key.

    Args:
        pem_text: PEM-encoded SubjectPublicKeyInfo

    Returns:
        RSA public key

    Raises:
        KeyFormatError: If the text is not an RSA public key
    """
    der = _decode_body(pem_text)
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Invalid public key: {exc}") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyFormatError("Public key is not an RSA key")
    return key


def encode_private_key(key: rsa.RSAPrivateKey) -> str:
    """Encode an RSA private key as PKCS#1 PEM text."""
    der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return _to_pem(der, PRIVATE_KEY_TYPE)


def encode_public_key(key: rsa.RSAPublicKey) -> str:
    """Encode an RSA public key as SubjectPublicKeyInfo PEM text."""
    der = key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return _to_pem(der, PUBLIC_KEY_TYPE)


def _to_pem(der: bytes, key_type: str) -> str:
    body = "\n".join(textwrap.wrap(base64.b64encode(der).decode("ascii"), LINE_LENGTH))
    return f"-----BEGIN {key_type}-----\n{body}\n-----END {key_type}-----\n"
