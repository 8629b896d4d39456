# --------------------------------------------------------------
# File: keys.py
# Description: Validación y decodificación de claves AES-256 suministradas.
# --------------------------------------------------------------
"""Frontera entre la clave textual del usuario y los bytes que usa el núcleo."""

from tmps_core.errors import InvalidKeyLength, KeyEncodingError

KEY_SIZE = 32


def ensure_key_length(key: bytes) -> bytes:
    """Comprueba que la clave tenga 256 bits antes de cualquier operación.

    Args:
        key (bytes): Material secreto suministrado por el llamador.

    Returns:
        bytes: La misma clave, como `bytes` inmutables.

    Raises:
        InvalidKeyLength: Si la clave no mide 32 bytes.

    """

    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key))
    return bytes(key)


def decode_key_hex(key_hex: str) -> bytes:
    """Decodifica una clave en hexadecimal (64 caracteres) y valida su tamaño.

    Args:
        key_hex (str): Clave en texto; se toleran espacios alrededor.

    Returns:
        bytes: Clave de 32 bytes.

    Raises:
        KeyEncodingError: Si el texto no es hexadecimal válido.
        InvalidKeyLength: Si los bytes decodificados no son 32.

    """

    try:
        key = bytes.fromhex(key_hex.strip())
    except ValueError as exc:
        raise KeyEncodingError("La clave debe expresarse en hexadecimal (64 caracteres)") from exc
    return ensure_key_length(key)
