# --------------------------------------------------------------
# File: verify.py
# Description: Verificación de paquetes cifrados contra su manifiesto.
# --------------------------------------------------------------
"""Comprobaciones de integridad de un paquete, con o sin la clave."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from tmps_core.crypto_hash import sha256_hex
from tmps_core.crypto_sym import aes256_gcm_decrypt
from tmps_core.errors import AuthenticationError
from tmps_core.manifest import MANIFEST_FILENAME
from tmps_core.models import ModelPackageManifest, VerificationReport
from tmps_core.package import ciphertext_path_for
from tmps_core.storage import load_manifest, read_bytes


def verify_bundle(
    bundle_dir: Union[str, Path],
    key: Optional[bytes] = None,
    manifest: Optional[ModelPackageManifest] = None,
) -> VerificationReport:
    """Contrasta los archivos del paquete con los digests del manifiesto.

    Sin clave solo se comprueba el SHA-256 del cifrado. Con clave se
    autentica además la etiqueta GCM y se compara el SHA-256 del claro.

    Args:
        bundle_dir (Union[str, Path]): Directorio del paquete.
        key (Optional[bytes]): Clave AES-256 opcional.
        manifest (Optional[ModelPackageManifest]): Manifiesto ya cargado.

    Returns:
        VerificationReport: Resultado de cada comprobación realizada.

    Raises:
        BundleIOError: Si falta el cifrado o el manifiesto.
        ManifestFormatError: Si el manifiesto no es válido.
        InvalidKeyLength: Si se pasa una clave de tamaño incorrecto.

    """

    if manifest is None:
        manifest = load_manifest(Path(bundle_dir) / MANIFEST_FILENAME)

    ciphertext_path = ciphertext_path_for(bundle_dir, manifest)
    ciphertext = read_bytes(ciphertext_path)
    report = VerificationReport(
        ciphertext_file=ciphertext_path.name,
        ciphertext_size=len(ciphertext),
        ciphertext_sha256_ok=sha256_hex(ciphertext) == manifest.integrity.ciphertext_sha256,
    )
    if key is None:
        return report

    try:
        plaintext = aes256_gcm_decrypt(
            key,
            bytes.fromhex(manifest.encryption.iv_hex),
            bytes.fromhex(manifest.encryption.tag_hex),
            ciphertext,
        )
    except AuthenticationError:
        return report.model_copy(update={"authenticated": False})

    return report.model_copy(
        update={
            "authenticated": True,
            "plaintext_sha256_ok": sha256_hex(plaintext) == manifest.integrity.plaintext_sha256,
        }
    )
