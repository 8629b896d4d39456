# --------------------------------------------------------------
# File: test_manifest.py
# Description: Pruebas del ensamblado y la serialización YAML del manifiesto.
# --------------------------------------------------------------

import pytest
from pydantic import ValidationError
import yaml

from tmps_core.errors import ManifestFormatError
from tmps_core.manifest import (
    ALGORITHM,
    BACKEND,
    SCHEMA_VERSION,
    TOOL_NAME,
    TOOL_VERSION,
    build_manifest,
    manifest_from_yaml,
    manifest_to_yaml,
)
from tmps_core.models import AesGcmResult


PT_SHA = "a" * 64
CT_SHA = "b" * 64


def _encryption() -> AesGcmResult:
    return AesGcmResult(ciphertext=b"\x00" * 4, nonce=bytes(range(12)), tag=bytes(range(16)))


def _build(model_info, clock):
    return build_manifest(
        model_info,
        _encryption(),
        key_ref="test-key-001",
        ciphertext_file="model.enc",
        plaintext_sha256=PT_SHA,
        ciphertext_sha256=CT_SHA,
        clock=clock,
    )


def test_build_manifest_binds_all_fields(model_info, fixed_clock):
    """Comprueba que el manifiesto recoja modelo, cifrado, integridad y formato.

    Args:
        model_info (ModelInfo): Metadatos de prueba.
        fixed_clock (Callable): Reloj fijo.

    Returns:
        None: Las aserciones validan cada sección.
    """
    manifest = _build(model_info, fixed_clock)

    assert manifest.model == model_info
    assert manifest.encryption.backend == BACKEND
    assert manifest.encryption.algorithm == ALGORITHM == "AES-256-GCM"
    assert manifest.encryption.key_ref == "test-key-001"
    assert manifest.encryption.ciphertext_file == "model.enc"
    assert manifest.encryption.iv_hex == "000102030405060708090a0b"
    assert manifest.encryption.tag_hex == "000102030405060708090a0b0c0d0e0f"
    assert manifest.encryption.created_at == fixed_clock()
    assert manifest.integrity.plaintext_sha256 == PT_SHA
    assert manifest.integrity.ciphertext_sha256 == CT_SHA
    assert manifest.packaging.schema_version == SCHEMA_VERSION
    assert manifest.packaging.tool == TOOL_NAME
    assert manifest.packaging.tool_version == TOOL_VERSION


def test_clock_is_read_exactly_once(model_info, fixed_clock):
    calls = []

    def _clock():
        calls.append(1)
        return fixed_clock()

    _build(model_info, _clock)
    assert len(calls) == 1


def test_manifest_is_immutable(model_info, fixed_clock):
    manifest = _build(model_info, fixed_clock)
    with pytest.raises(ValidationError):
        manifest.encryption.key_ref = "other"


def test_manifest_never_contains_key_material(model_info, fixed_clock):
    """Verifica que el YAML solo lleve la referencia de la clave."""
    text = manifest_to_yaml(_build(model_info, fixed_clock))
    data = yaml.safe_load(text)
    assert data["encryption"]["key_ref"] == "test-key-001"
    assert "key" not in data["encryption"]
    assert "11" * 32 not in text


def test_yaml_roundtrip_preserves_manifest(model_info, fixed_clock):
    """Garantiza que serializar y cargar de nuevo devuelva el mismo manifiesto.

    Returns:
        None: Se compara el modelo reconstruido con el original.
    """
    manifest = _build(model_info, fixed_clock)
    text = manifest_to_yaml(manifest)
    assert list(yaml.safe_load(text)) == ["model", "encryption", "integrity", "packaging"]
    assert manifest_from_yaml(text) == manifest


def test_unknown_fields_are_ignored(model_info, fixed_clock):
    manifest = _build(model_info, fixed_clock)
    data = yaml.safe_load(manifest_to_yaml(manifest))
    data["packaging"]["signature"] = "future-field"
    assert manifest_from_yaml(yaml.safe_dump(data)) == manifest


@pytest.mark.parametrize(
    "text",
    [
        "model: [unclosed",
        "- just\n- a list\n",
        "model: {}\n",
    ],
)
def test_invalid_manifest_documents_rejected(text):
    with pytest.raises(ManifestFormatError):
        manifest_from_yaml(text)


def test_malformed_hex_fields_rejected(model_info, fixed_clock):
    data = yaml.safe_load(manifest_to_yaml(_build(model_info, fixed_clock)))
    data["encryption"]["iv_hex"] = "XYZ"
    with pytest.raises(ManifestFormatError):
        manifest_from_yaml(yaml.safe_dump(data))
