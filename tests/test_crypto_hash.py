# --------------------------------------------------------------
# File: test_crypto_hash.py
# Description: Pruebas del digest SHA-256 usado en el manifiesto.
# --------------------------------------------------------------

from tmps_core.crypto_hash import EMPTY_SHA256_HEX, sha256_digest, sha256_hex


def test_empty_input_has_well_known_digest():
    assert sha256_hex(b"") == EMPTY_SHA256_HEX
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_known_vector_abc():
    """Comprueba el vector de prueba FIPS 180-2 para "abc"."""
    assert sha256_hex(b"abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_digest_is_deterministic_and_discriminating():
    """Verifica determinismo y que entradas distintas den digests distintos.

    Returns:
        None: Las aserciones comparan los valores obtenidos.
    """
    samples = [b"", b"a", b"b", b"model-v1", b"model-v2", bytes(1024)]
    digests = [sha256_hex(s) for s in samples]
    assert digests == [sha256_hex(s) for s in samples]
    assert len(set(digests)) == len(samples)


def test_hex_is_lowercase_and_matches_raw_digest():
    raw = sha256_digest(b"payload")
    hexed = sha256_hex(b"payload")
    assert len(raw) == 32
    assert hexed == raw.hex()
    assert hexed == hexed.lower()
