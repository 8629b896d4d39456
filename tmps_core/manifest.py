# --------------------------------------------------------------
# File: manifest.py
# Description: Construcción y serialización YAML del manifiesto del paquete.
# --------------------------------------------------------------
"""Ensamblado del manifiesto que vincula el cifrado con sus parámetros."""

from datetime import UTC, datetime
from typing import Callable

import cryptography
import yaml
from pydantic import ValidationError

from tmps_core.errors import ManifestFormatError
from tmps_core.models import (
    AesGcmResult,
    EncryptionInfo,
    IntegrityInfo,
    ModelInfo,
    ModelPackageManifest,
    PackagingInfo,
)

CIPHERTEXT_FILENAME = "model.enc"
MANIFEST_FILENAME = "model_package.yaml"

ALGORITHM = "AES-256-GCM"
BACKEND = f"cryptography-{cryptography.__version__}"

SCHEMA_VERSION = "1.0.0"
TOOL_NAME = "praesago-tmps"
TOOL_VERSION = "0.1.0"

# Reloj inyectable: devuelve el instante actual en UTC.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def packaging_info() -> PackagingInfo:
    """Devuelve los metadatos fijos que describen el formato del manifiesto."""

    return PackagingInfo(
        schema_version=SCHEMA_VERSION,
        tool=TOOL_NAME,
        tool_version=TOOL_VERSION,
    )


def build_manifest(
    model_info: ModelInfo,
    encryption: AesGcmResult,
    *,
    key_ref: str,
    ciphertext_file: str,
    plaintext_sha256: str,
    ciphertext_sha256: str,
    clock: Clock = utc_now,
) -> ModelPackageManifest:
    """Ensambla el manifiesto a partir de valores ya calculados.

    No realiza E/S. El reloj se consulta una única vez y su valor queda
    fijado como `created_at`.

    Args:
        model_info (ModelInfo): Metadatos del modelo aportados por el llamador.
        encryption (AesGcmResult): Resultado del cifrado (se usan nonce y tag).
        key_ref (str): Etiqueta legible que indica dónde reside la clave.
        ciphertext_file (str): Nombre del archivo cifrado dentro del paquete.
        plaintext_sha256 (str): Digest hexadecimal del artefacto original.
        ciphertext_sha256 (str): Digest hexadecimal de los bytes cifrados.
        clock (Clock): Fuente del instante de creación.

    Returns:
        ModelPackageManifest: Registro inmutable listo para persistir.

    """

    created_at = clock()

    encryption_info = EncryptionInfo(
        backend=BACKEND,
        algorithm=ALGORITHM,
        key_ref=key_ref,
        ciphertext_file=ciphertext_file,
        iv_hex=encryption.nonce.hex(),
        tag_hex=encryption.tag.hex(),
        created_at=created_at,
    )
    integrity = IntegrityInfo(
        plaintext_sha256=plaintext_sha256,
        ciphertext_sha256=ciphertext_sha256,
    )
    return ModelPackageManifest(
        model=model_info,
        encryption=encryption_info,
        integrity=integrity,
        packaging=packaging_info(),
    )


def manifest_to_yaml(manifest: ModelPackageManifest) -> str:
    """Serializa el manifiesto a YAML conservando el orden de los campos."""

    return yaml.safe_dump(
        manifest.model_dump(mode="json"),
        sort_keys=False,
        allow_unicode=True,
    )


def manifest_from_yaml(text: str) -> ModelPackageManifest:
    """Reconstruye y valida un manifiesto desde su representación YAML.

    Args:
        text (str): Documento YAML previamente generado por `manifest_to_yaml`.

    Returns:
        ModelPackageManifest: Manifiesto validado.

    Raises:
        ManifestFormatError: Si el YAML es inválido o no respeta el esquema.

    """

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestFormatError(f"YAML inválido: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestFormatError("El manifiesto debe ser un mapa YAML")
    try:
        return ModelPackageManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestFormatError(f"Manifiesto no válido: {exc}") from exc
