# --------------------------------------------------------------
# File: main.py
# Description: Comandos `tmps` para empaquetar, verificar y desempaquetar modelos.
# --------------------------------------------------------------
"""Praesago TMPS: empaquetado cifrado y manifiesto de modelos (v1)."""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path
from typing import NoReturn, Optional

import click

from tmps_core import config
from tmps_core.errors import TmpsError
from tmps_core.keys import decode_key_hex
from tmps_core.manifest import MANIFEST_FILENAME, TOOL_VERSION
from tmps_core.models import ModelInfo
from tmps_core.package import package_model_file, unpack_model_file
from tmps_core.storage import write_bytes_atomic, write_manifest_to_yaml
from tmps_core.verify import verify_bundle

logger = logging.getLogger(__name__)


def handle_error(error: Exception, debug: bool) -> NoReturn:
    """Muestra el error al usuario y termina con código 1.

    Args:
        error (Exception): Excepción capturada.
        debug (bool): Si se debe mostrar la traza completa.
    """
    if debug:
        traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)


def _resolve_key(key_hex: Optional[str]) -> bytes:
    """Obtiene la clave de --key-hex o de la variable de entorno configurada."""
    if key_hex is None:
        key_hex = os.getenv(config.KEY_HEX_ENV)
    if not key_hex:
        raise click.UsageError(f"Falta la clave: usa --key-hex o define {config.KEY_HEX_ENV}")
    return decode_key_hex(key_hex)


@click.group()
@click.version_option(version=TOOL_VERSION, prog_name="tmps")
@click.option("--debug", is_flag=True, help="Muestra trazas completas y registro detallado")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Praesago TMPS: cifra modelos con AES-256-GCM y genera su manifiesto."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("tmps_cli").setLevel(logging.DEBUG)


@cli.command()
@click.option("--model", required=True, type=click.Path(path_type=Path), help="Archivo del modelo (p. ej. model.onnx)")
@click.option("--output-dir", required=True, type=click.Path(path_type=Path), help="Directorio de salida")
@click.option("--model-id", required=True, help="Identificador único del modelo")
@click.option("--name", required=True, help="Nombre legible del modelo")
@click.option("--version", "model_version", required=True, help="Versión del modelo")
@click.option("--format", "model_format", default=config.DEFAULT_MODEL_FORMAT, show_default=True, help="Formato (onnx, pt, h5...)")
@click.option("--key-ref", default=config.DEFAULT_KEY_REF, show_default=True, help="Referencia de la clave usada")
@click.option("--key-hex", default=None, help="Clave AES-256 en hexadecimal (64 caracteres)")
@click.pass_context
def package(
    ctx: click.Context,
    model: Path,
    output_dir: Path,
    model_id: str,
    name: str,
    model_version: str,
    model_format: str,
    key_ref: str,
    key_hex: Optional[str],
):
    """Cifra un modelo y escribe `model.enc` junto a su manifiesto."""
    debug = ctx.obj["debug"]
    try:
        key = _resolve_key(key_hex)
        model_info = ModelInfo(
            id=model_id,
            name=name,
            version=model_version,
            format=model_format,
            original_filename=model.name,
        )

        logger.debug("Cifrando %s con referencia de clave %s", model, key_ref)
        manifest = package_model_file(key, model, output_dir, model_info, key_ref)

        manifest_path = output_dir / MANIFEST_FILENAME
        write_manifest_to_yaml(manifest, manifest_path)
        logger.debug("Manifiesto escrito en %s", manifest_path)
    except TmpsError as e:
        handle_error(e, debug)

    click.echo("Modelo cifrado correctamente.")
    click.echo(f" Cifrado: {output_dir / manifest.encryption.ciphertext_file}")
    click.echo(f" Manifiesto: {manifest_path}")


@cli.command()
@click.argument("bundle_dir", type=click.Path(path_type=Path))
@click.option("--key-hex", default=None, help="Clave AES-256 para autenticar además el contenido")
@click.pass_context
def verify(ctx: click.Context, bundle_dir: Path, key_hex: Optional[str]):
    """Comprueba un paquete contra los digests de su manifiesto."""
    debug = ctx.obj["debug"]
    try:
        key = decode_key_hex(key_hex) if key_hex else None
        report = verify_bundle(bundle_dir, key=key)
    except TmpsError as e:
        handle_error(e, debug)

    def _mark(value: Optional[bool]) -> str:
        if value is None:
            return "-"
        return "OK" if value else "FALLA"

    click.echo(f"Cifrado: {report.ciphertext_file} ({report.ciphertext_size} bytes)")
    click.echo(f" SHA-256 del cifrado: {_mark(report.ciphertext_sha256_ok)}")
    click.echo(f" Etiqueta GCM: {_mark(report.authenticated)}")
    click.echo(f" SHA-256 del claro: {_mark(report.plaintext_sha256_ok)}")

    if not report.ok:
        click.echo("Error: el paquete no supera la verificación", err=True)
        sys.exit(1)


@cli.command()
@click.argument("bundle_dir", type=click.Path(path_type=Path))
@click.option("--out", "out_path", required=True, type=click.Path(path_type=Path), help="Ruta del modelo recuperado")
@click.option("--key-hex", default=None, help="Clave AES-256 en hexadecimal (64 caracteres)")
@click.pass_context
def unpack(ctx: click.Context, bundle_dir: Path, out_path: Path, key_hex: Optional[str]):
    """Descifra un paquete y escribe el modelo original."""
    debug = ctx.obj["debug"]
    try:
        key = _resolve_key(key_hex)
        plaintext = unpack_model_file(key, bundle_dir)
        write_bytes_atomic(out_path, plaintext)
    except TmpsError as e:
        handle_error(e, debug)

    click.echo(f"Modelo descifrado en {out_path} ({len(plaintext)} bytes)")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
