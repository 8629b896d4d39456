# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas: clave fija, entorno aislado y fuentes deterministas.
# --------------------------------------------------------------

from datetime import UTC, datetime
from typing import Iterator

import pytest

from tmps_core.models import ModelInfo

FIXED_NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH y elimina cualquier clave presente en el entorno.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    data_dir.mkdir()
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))
    monkeypatch.delenv("TMPS_KEY_HEX", raising=False)
    yield


@pytest.fixture
def key() -> bytes:
    """Clave AES-256 estática de pruebas (32 bytes de valor 0x11)."""
    return bytes([0x11] * 32)


@pytest.fixture
def model_info() -> ModelInfo:
    return ModelInfo(
        id="test-model-001",
        name="Test Model",
        version="0.0.1-test",
        format="onnx",
        original_filename="test_model.onnx",
    )


@pytest.fixture
def fixed_clock():
    """Reloj que siempre devuelve el mismo instante UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def counting_random():
    """Fuente de bytes determinista que además cuenta sus invocaciones.

    Returns:
        Callable[[int], bytes]: Proveedor con atributo `calls`.
    """

    def _random(size: int) -> bytes:
        _random.calls += 1
        return bytes([_random.calls % 256]) * size

    _random.calls = 0
    return _random
