# --------------------------------------------------------------
# File: storage.py
# Description: Persistencia atómica del cifrado y del manifiesto en disco.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para los archivos del paquete."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from tmps_core.errors import BundleIOError, ManifestFormatError
from tmps_core.manifest import manifest_from_yaml, manifest_to_yaml
from tmps_core.models import ModelPackageManifest

__all__ = [
    "ensure_dir",
    "load_manifest",
    "read_bytes",
    "secure_name",
    "write_bytes_atomic",
    "write_manifest_to_yaml",
]

PathLike = Union[str, Path]


def secure_name(name: str) -> str:
    """Normaliza un identificador para usarlo como nombre de carpeta.

    Args:
        name (str): Texto original proporcionado por el usuario.

    Returns:
        str: Nombre limpio y libre de rutas o caracteres inválidos; cadena
        vacía si no queda ningún nombre utilizable.

    """

    bad = '<>:"/\\|?*'
    for ch in bad:
        name = name.replace(ch, "_")
    name = name.strip().replace("..", "_")
    return "" if name in ("", ".") else name


def ensure_dir(path: PathLike) -> Path:
    """Crea el directorio y los padres que falten."""

    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BundleIOError("No se pudo crear el directorio", path) from exc
    return path


def read_bytes(path: PathLike) -> bytes:
    """Lee un archivo completo en memoria.

    Args:
        path (PathLike): Ruta del archivo a leer.

    Returns:
        bytes: Contenido íntegro del archivo.

    Raises:
        BundleIOError: Si el archivo no existe o no es legible.

    """

    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise BundleIOError("No se pudo leer el archivo", path) from exc


def write_bytes_atomic(path: PathLike, data: bytes) -> Path:
    """Escribe `data` en un temporal y lo renombra sobre el destino.

    El contenido queda volcado a disco antes del renombrado, de modo que el
    destino nunca contiene una escritura parcial.
    """

    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "wb") as handler:
            handler.write(data)
            handler.flush()
            os.fsync(handler.fileno())
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise BundleIOError("No se pudo escribir el archivo", path) from exc
    return path


def write_manifest_to_yaml(manifest: ModelPackageManifest, output_path: PathLike) -> Path:
    """Serializa el manifiesto a YAML y lo guarda de forma atómica.

    Args:
        manifest (ModelPackageManifest): Manifiesto devuelto por el empaquetado.
        output_path (PathLike): Ruta destino del documento YAML.

    Returns:
        Path: Ruta escrita.

    """

    return write_bytes_atomic(output_path, manifest_to_yaml(manifest).encode("utf-8"))


def load_manifest(path: PathLike) -> ModelPackageManifest:
    """Carga y valida un manifiesto YAML desde disco.

    Raises:
        BundleIOError: Si el archivo no es legible.
        ManifestFormatError: Si el contenido no es un manifiesto válido.

    """

    raw = read_bytes(path)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestFormatError("El manifiesto no está codificado en UTF-8", path) from exc
    return manifest_from_yaml(text)
