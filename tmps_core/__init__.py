# --------------------------------------------------------------
# File: __init__.py
# Description: API pública del núcleo de empaquetado cifrado de modelos.
# --------------------------------------------------------------
"""Inicializa el paquete `tmps_core` y reexporta sus funciones principales."""

from tmps_core.crypto_hash import EMPTY_SHA256_HEX, sha256_hex
from tmps_core.crypto_sym import aes256_gcm_decrypt, aes256_gcm_encrypt
from tmps_core.errors import (
    AuthenticationError,
    BundleIOError,
    CipherBackendError,
    IntegrityError,
    InvalidKeyLength,
    KeyEncodingError,
    ManifestFormatError,
    TmpsError,
)
from tmps_core.keys import decode_key_hex
from tmps_core.manifest import CIPHERTEXT_FILENAME, MANIFEST_FILENAME, build_manifest
from tmps_core.models import AesGcmResult, ModelInfo, ModelPackageManifest, VerificationReport
from tmps_core.package import package_model_file, unpack_model_file
from tmps_core.storage import load_manifest, write_manifest_to_yaml
from tmps_core.verify import verify_bundle

__all__ = [
    "AesGcmResult",
    "AuthenticationError",
    "BundleIOError",
    "CIPHERTEXT_FILENAME",
    "CipherBackendError",
    "EMPTY_SHA256_HEX",
    "IntegrityError",
    "InvalidKeyLength",
    "KeyEncodingError",
    "MANIFEST_FILENAME",
    "ManifestFormatError",
    "ModelInfo",
    "ModelPackageManifest",
    "TmpsError",
    "VerificationReport",
    "aes256_gcm_decrypt",
    "aes256_gcm_encrypt",
    "build_manifest",
    "decode_key_hex",
    "load_manifest",
    "package_model_file",
    "sha256_hex",
    "unpack_model_file",
    "verify_bundle",
    "write_manifest_to_yaml",
]
