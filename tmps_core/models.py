# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos del paquete cifrado y de su manifiesto.
# --------------------------------------------------------------
"""Modelos Pydantic que describen el resultado AES-GCM y el manifiesto del paquete."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_HEX_NONCE = r"^[0-9a-f]{24}$"
_HEX_TAG = r"^[0-9a-f]{32}$"
_HEX_SHA256 = r"^[0-9a-f]{64}$"


class AesGcmResult(BaseModel):
    """Representa el resultado de una operación AES-GCM.

    Attributes:
        ciphertext (bytes): Datos cifrados sin etiqueta.
        nonce (bytes): Vector de inicialización de 96 bits utilizado durante el cifrado.
        tag (bytes): Etiqueta de autenticación de 128 bits generada por AES-GCM.

    """

    model_config = ConfigDict(frozen=True)

    ciphertext: bytes
    nonce: bytes
    tag: bytes


class ModelInfo(BaseModel):
    """Metadatos del modelo aportados por el llamador; opacos para el núcleo."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    version: str
    format: str
    original_filename: str


class EncryptionInfo(BaseModel):
    """Parámetros criptográficos necesarios para descifrar `ciphertext_file`.

    `key_ref` es solo una etiqueta que indica dónde se gestiona la clave;
    la clave nunca forma parte del manifiesto.
    """

    model_config = ConfigDict(frozen=True)

    backend: str
    algorithm: str
    key_ref: str
    ciphertext_file: str
    iv_hex: str = Field(pattern=_HEX_NONCE)
    tag_hex: str = Field(pattern=_HEX_TAG)
    created_at: datetime


class IntegrityInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    plaintext_sha256: str = Field(pattern=_HEX_SHA256)
    ciphertext_sha256: str = Field(pattern=_HEX_SHA256)


class PackagingInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    schema_version: str
    tool: str
    tool_version: str


class ModelPackageManifest(BaseModel):
    """Manifiesto completo de un paquete: modelo, cifrado, integridad y formato."""

    model_config = ConfigDict(frozen=True)

    model: ModelInfo
    encryption: EncryptionInfo
    integrity: IntegrityInfo
    packaging: PackagingInfo


class VerificationReport(BaseModel):
    """Resultado de comprobar un paquete en disco contra su manifiesto.

    Attributes:
        ciphertext_file (str): Nombre del archivo cifrado comprobado.
        ciphertext_size (int): Tamaño en bytes del cifrado leído.
        ciphertext_sha256_ok (bool): Coincidencia del digest del cifrado.
        authenticated (Optional[bool]): Resultado de la etiqueta GCM; `None` sin clave.
        plaintext_sha256_ok (Optional[bool]): Coincidencia del digest del claro;
            `None` si no se pudo descifrar.

    """

    ciphertext_file: str
    ciphertext_size: int
    ciphertext_sha256_ok: bool
    authenticated: Optional[bool] = None
    plaintext_sha256_ok: Optional[bool] = None

    @property
    def ok(self) -> bool:
        """Indica si todas las comprobaciones ejecutadas han sido satisfactorias."""

        return (
            self.ciphertext_sha256_ok
            and self.authenticated is not False
            and self.plaintext_sha256_ok is not False
        )
