# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-256-GCM para cifrado y descifrado autenticado.
# --------------------------------------------------------------
"""Cifrado autenticado del artefacto con AES-256-GCM.

El nonce se genera siempre dentro de `aes256_gcm_encrypt`; la API no admite
un nonce proporcionado por el llamador, de modo que no puede reutilizarse
con la misma clave.
"""

import os
from typing import Callable, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from tmps_core.errors import AuthenticationError, CipherBackendError
from tmps_core.keys import ensure_key_length
from tmps_core.models import AesGcmResult

NONCE_SIZE = 12
TAG_SIZE = 16

# Proveedor de bytes aleatorios: recibe un tamaño y devuelve esa cantidad de bytes.
RandomBytes = Callable[[int], bytes]


def aes256_gcm_encrypt(
    key: bytes,
    plaintext: bytes,
    *,
    random_bytes: RandomBytes = os.urandom,
    aad: Optional[bytes] = None,
) -> AesGcmResult:
    """Cifra datos con AES-256-GCM usando un nonce aleatorio de 96 bits.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        plaintext (bytes): Datos en claro; se admite la entrada vacía.
        random_bytes (RandomBytes): Fuente de aleatoriedad criptográfica para el nonce.
        aad (Optional[bytes]): Datos autenticados adicionales (por defecto ninguno).

    Returns:
        AesGcmResult: `ciphertext` de la misma longitud que el claro, `nonce` y `tag`.

    Raises:
        InvalidKeyLength: Si la clave no mide 32 bytes.
        CipherBackendError: Si el backend o la fuente aleatoria fallan.

    """

    key = ensure_key_length(key)

    try:
        nonce = random_bytes(NONCE_SIZE)
    except Exception as exc:
        raise CipherBackendError(f"Fallo de la fuente aleatoria: {exc}") from None
    if len(nonce) != NONCE_SIZE:
        raise CipherBackendError(
            f"La fuente aleatoria devolvió {len(nonce)} bytes en lugar de {NONCE_SIZE}"
        )

    try:
        ct_full = AESGCM(key).encrypt(nonce, plaintext, aad)
    except (ValueError, TypeError, OverflowError) as exc:
        raise CipherBackendError(f"Fallo del backend AES-GCM: {exc}") from None

    tag = ct_full[-TAG_SIZE:]
    ciphertext = ct_full[:-TAG_SIZE]
    return AesGcmResult(ciphertext=ciphertext, nonce=nonce, tag=tag)


def aes256_gcm_decrypt(
    key: bytes,
    nonce: bytes,
    tag: bytes,
    ciphertext: bytes,
    *,
    aad: Optional[bytes] = None,
) -> bytes:
    """Descifra datos AES-256-GCM verificando la etiqueta de autenticación.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        nonce (bytes): Vector de inicialización de 96 bits.
        tag (bytes): Etiqueta de autenticación de 128 bits.
        ciphertext (bytes): Datos cifrados sin etiqueta.
        aad (Optional[bytes]): Datos autenticados adicionales usados al cifrar.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        InvalidKeyLength: Si la clave no mide 32 bytes.
        AuthenticationError: Si la etiqueta no verifica; no se devuelve ningún byte.
        CipherBackendError: Si el backend falla por otro motivo.

    """

    key = ensure_key_length(key)

    # GCM solo fija tamaños de 12 y 16 bytes en este formato de paquete.
    if len(nonce) != NONCE_SIZE or len(tag) != TAG_SIZE:
        raise AuthenticationError(
            f"Nonce o tag con tamaño inesperado ({len(nonce)}/{len(tag)} bytes)"
        )

    try:
        return AESGCM(key).decrypt(nonce, bytes(ciphertext) + bytes(tag), aad)
    except InvalidTag:
        raise AuthenticationError(
            "La etiqueta GCM no verifica: clave, nonce, tag o cifrado no coinciden"
        ) from None
    except (ValueError, TypeError, OverflowError) as exc:
        raise CipherBackendError(f"Fallo del backend AES-GCM: {exc}") from None
