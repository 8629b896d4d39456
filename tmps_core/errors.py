# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones expuesta por el núcleo de empaquetado.
# --------------------------------------------------------------
"""Errores tipados que el núcleo devuelve a sus llamadores."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class TmpsError(Exception):
    """Raíz común de todos los errores del núcleo."""


class InvalidKeyLength(TmpsError, ValueError):
    """La clave AES-256 no mide exactamente 32 bytes.

    Attributes:
        length (int): Longitud en bytes de la clave recibida.

    """

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"Longitud de clave AES-256 inválida: se esperaban 32 bytes, recibidos {length}"
        )


class KeyEncodingError(TmpsError, ValueError):
    """La representación textual de la clave no es hexadecimal válida."""


class CipherBackendError(TmpsError):
    """Fallo opaco del backend criptográfico subyacente."""


class AuthenticationError(TmpsError):
    """La etiqueta GCM no verifica: datos corruptos, manipulados o clave errónea."""


class BundleIOError(TmpsError):
    """Error de entrada/salida asociado a una ruta concreta del paquete.

    Attributes:
        path (Path): Ruta implicada en la operación fallida.

    """

    def __init__(self, message: str, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class ManifestFormatError(TmpsError):
    """El manifiesto no es YAML válido o no respeta el esquema."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message if path is None else f"{message} ({path})")


class IntegrityError(TmpsError):
    """Un digest registrado en el manifiesto no coincide con los bytes reales."""
