# --------------------------------------------------------------
# File: test_verify.py
# Description: Pruebas de verificación de paquetes contra su manifiesto.
# --------------------------------------------------------------

import pytest

from tmps_core.errors import BundleIOError, InvalidKeyLength
from tmps_core.manifest import MANIFEST_FILENAME
from tmps_core.package import package_model_file
from tmps_core.storage import write_manifest_to_yaml
from tmps_core.verify import verify_bundle


@pytest.fixture
def bundle_dir(tmp_path, key, model_info):
    """Genera un paquete completo (cifrado + manifiesto) en una carpeta temporal.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        key (bytes): Clave de prueba.
        model_info (ModelInfo): Metadatos de prueba.

    Returns:
        Path: Directorio del paquete.
    """
    src = tmp_path / "weights.pt"
    src.write_bytes(b"\x00\x01weights" * 64)
    out_dir = tmp_path / "bundle"
    manifest = package_model_file(key, src, out_dir, model_info, "ref")
    write_manifest_to_yaml(manifest, out_dir / MANIFEST_FILENAME)
    return out_dir


def test_keyless_verification_ok(bundle_dir):
    report = verify_bundle(bundle_dir)
    assert report.ciphertext_sha256_ok
    assert report.ciphertext_size == len(b"\x00\x01weights" * 64)
    assert report.authenticated is None
    assert report.plaintext_sha256_ok is None
    assert report.ok


def test_keyed_verification_ok(bundle_dir, key):
    report = verify_bundle(bundle_dir, key=key)
    assert report.authenticated is True
    assert report.plaintext_sha256_ok is True
    assert report.ok


def test_tampered_ciphertext_fails_both_checks(bundle_dir, key):
    """Alterar el cifrado rompe el digest y la etiqueta GCM."""
    enc = bundle_dir / "model.enc"
    data = bytearray(enc.read_bytes())
    data[-1] ^= 0x80
    enc.write_bytes(bytes(data))

    report = verify_bundle(bundle_dir, key=key)
    assert not report.ciphertext_sha256_ok
    assert report.authenticated is False
    assert report.plaintext_sha256_ok is None
    assert not report.ok


def test_wrong_key_reports_authentication_failure(bundle_dir):
    report = verify_bundle(bundle_dir, key=b"\x22" * 32)
    assert report.ciphertext_sha256_ok
    assert report.authenticated is False
    assert not report.ok


def test_wrong_key_length_is_rejected(bundle_dir):
    with pytest.raises(InvalidKeyLength):
        verify_bundle(bundle_dir, key=b"\x11" * 31)


def test_missing_ciphertext_is_io_error(bundle_dir):
    (bundle_dir / "model.enc").unlink()
    with pytest.raises(BundleIOError):
        verify_bundle(bundle_dir)


def test_missing_manifest_is_io_error(tmp_path):
    with pytest.raises(BundleIOError):
        verify_bundle(tmp_path)
