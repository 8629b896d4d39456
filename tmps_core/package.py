# --------------------------------------------------------------
# File: package.py
# Description: Orquestación del empaquetado cifrado de un modelo y su inversa.
# --------------------------------------------------------------
"""Pipeline de empaquetado: leer, cifrar, escribir `model.enc` y construir el manifiesto.

Todo el artefacto se carga en memoria; no hay cifrado por bloques para
modelos que no quepan en RAM. Dos llamadas concurrentes sobre el mismo
directorio de salida compiten por los mismos archivos y no se sincronizan.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from tmps_core.crypto_hash import sha256_hex
from tmps_core.crypto_sym import RandomBytes, aes256_gcm_decrypt, aes256_gcm_encrypt
from tmps_core.errors import IntegrityError, ManifestFormatError
from tmps_core.keys import ensure_key_length
from tmps_core.manifest import (
    CIPHERTEXT_FILENAME,
    MANIFEST_FILENAME,
    Clock,
    build_manifest,
    utc_now,
)
from tmps_core.models import ModelInfo, ModelPackageManifest
from tmps_core.storage import ensure_dir, load_manifest, read_bytes, write_bytes_atomic

PathLike = Union[str, Path]


def package_model_file(
    key: bytes,
    model_path: PathLike,
    output_dir: PathLike,
    model_info: ModelInfo,
    key_ref: str,
    *,
    random_bytes: RandomBytes = os.urandom,
    clock: Clock = utc_now,
) -> ModelPackageManifest:
    """Cifra un archivo de modelo y devuelve el manifiesto que lo describe.

    Escribe `model.enc` en `output_dir` (creándolo si hace falta). El
    manifiesto no se persiste aquí: el llamador decide cuándo y dónde
    escribirlo, normalmente con `write_manifest_to_yaml`.

    Args:
        key (bytes): Clave AES-256 de 32 bytes.
        model_path (PathLike): Artefacto de origen a proteger.
        output_dir (PathLike): Directorio donde se deja el cifrado.
        model_info (ModelInfo): Metadatos del modelo.
        key_ref (str): Etiqueta que indica dónde se gestiona la clave.
        random_bytes (RandomBytes): Fuente de aleatoriedad para el nonce.
        clock (Clock): Reloj UTC para `created_at`.

    Returns:
        ModelPackageManifest: Manifiesto con parámetros de cifrado y digests.

    Raises:
        InvalidKeyLength: Si la clave no mide 32 bytes (sin efectos en disco).
        BundleIOError: Si falla la lectura, la creación del directorio o la escritura.
        CipherBackendError: Si falla el backend criptográfico.

    """

    key = ensure_key_length(key)

    plaintext = read_bytes(model_path)
    result = aes256_gcm_encrypt(key, plaintext, random_bytes=random_bytes)

    out_dir = ensure_dir(output_dir)
    ciphertext_path = write_bytes_atomic(out_dir / CIPHERTEXT_FILENAME, result.ciphertext)

    # Ambos digests se calculan sobre los bytes exactos leídos y escritos.
    plaintext_sha = sha256_hex(plaintext)
    ciphertext_sha = sha256_hex(result.ciphertext)

    return build_manifest(
        model_info,
        result,
        key_ref=key_ref,
        ciphertext_file=ciphertext_path.name,
        plaintext_sha256=plaintext_sha,
        ciphertext_sha256=ciphertext_sha,
        clock=clock,
    )


def ciphertext_path_for(bundle_dir: PathLike, manifest: ModelPackageManifest) -> Path:
    """Resuelve la ruta del cifrado impidiendo salir del directorio del paquete."""

    name = manifest.encryption.ciphertext_file
    if not name or Path(name).name != name or name in (".", ".."):
        raise ManifestFormatError(f"Nombre de archivo cifrado no permitido: {name!r}")
    return Path(bundle_dir) / name


def unpack_model_file(
    key: bytes,
    bundle_dir: PathLike,
    manifest: Optional[ModelPackageManifest] = None,
) -> bytes:
    """Recupera el modelo original de un paquete generado por `package_model_file`.

    Args:
        key (bytes): Clave AES-256 usada al empaquetar.
        bundle_dir (PathLike): Directorio con `model.enc` y el manifiesto.
        manifest (Optional[ModelPackageManifest]): Manifiesto ya cargado; si se
            omite se lee `model_package.yaml` del propio paquete.

    Returns:
        bytes: Artefacto en claro.

    Raises:
        IntegrityError: Si algún digest del manifiesto no coincide.
        AuthenticationError: Si la etiqueta GCM no verifica.

    """

    key = ensure_key_length(key)
    if manifest is None:
        manifest = load_manifest(Path(bundle_dir) / MANIFEST_FILENAME)

    ciphertext = read_bytes(ciphertext_path_for(bundle_dir, manifest))
    if sha256_hex(ciphertext) != manifest.integrity.ciphertext_sha256:
        raise IntegrityError("El SHA-256 del cifrado no coincide con el manifiesto")

    plaintext = aes256_gcm_decrypt(
        key,
        bytes.fromhex(manifest.encryption.iv_hex),
        bytes.fromhex(manifest.encryption.tag_hex),
        ciphertext,
    )
    if sha256_hex(plaintext) != manifest.integrity.plaintext_sha256:
        raise IntegrityError("El SHA-256 del claro no coincide con el manifiesto")
    return plaintext
