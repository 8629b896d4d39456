# --------------------------------------------------------------
# File: crypto_hash.py
# Description: Huellas SHA-256 para comprobar integridad de claro y cifrado.
# --------------------------------------------------------------
"""Digest de integridad de 256 bits sobre secuencias arbitrarias de bytes."""

import hashlib

# Digest SHA-256 de la entrada vacía.
EMPTY_SHA256_HEX = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def sha256_digest(data: bytes) -> bytes:
    """Calcula el digest SHA-256 en bruto (32 bytes)."""

    return hashlib.sha256(data).digest()


def sha256_hex(data: bytes) -> str:
    """Calcula el SHA-256 de `data` y lo devuelve en hexadecimal en minúsculas.

    Args:
        data (bytes): Contenido a resumir; se admite la entrada vacía.

    Returns:
        str: 64 caracteres hexadecimales listos para incrustar en el manifiesto.

    """

    return hashlib.sha256(data).hexdigest()
