# --------------------------------------------------------------
# File: 2_Verificar_y_Descifrar.py
# Description: Permite verificar paquetes almacenados y descifrarlos desde Streamlit.
# --------------------------------------------------------------

import os
from typing import List

import streamlit as st

from tmps_core import config
from tmps_core.crypto_hash import sha256_hex
from tmps_core.errors import AuthenticationError, IntegrityError, TmpsError
from tmps_core.keys import decode_key_hex
from tmps_core.manifest import MANIFEST_FILENAME, manifest_to_yaml
from tmps_core.package import unpack_model_file
from tmps_core.storage import load_manifest
from tmps_core.verify import verify_bundle


def _bundles_dir() -> str:
    """Calcula la ruta donde se guardan los paquetes.

    Returns:
        str: Carpeta `bundles` dentro de STORAGE_PATH.
    """
    return os.path.join(config.STORAGE_PATH, "bundles")


def _list_bundles(root: str) -> List[str]:
    """Devuelve los paquetes que contienen un manifiesto.

    Args:
        root (str): Carpeta que agrupa los paquetes.

    Returns:
        List[str]: Nombres de carpeta ordenados alfabéticamente.
    """
    if not os.path.isdir(root):
        return []
    return sorted(
        d for d in os.listdir(root) if os.path.isfile(os.path.join(root, d, MANIFEST_FILENAME))
    )


def _mark(value) -> str:
    if value is None:
        return "-"
    return "✅ OK" if value else "❌ FALLA"


# Presenta el título de la sección orientada a la restauración.
st.title("📥 Verificar y descifrar")

root = _bundles_dir()
bundles = _list_bundles(root)
if not bundles:
    st.info("No hay paquetes almacenados aún. Ve a **Empaquetar modelo** para crear alguno.")
    st.stop()

sel = st.selectbox("Selecciona un paquete:", bundles, index=0)
bundle_dir = os.path.join(root, sel)

# Carga el manifiesto asociado al paquete seleccionado.
try:
    manifest = load_manifest(os.path.join(bundle_dir, MANIFEST_FILENAME))
except TmpsError as exc:
    st.error(f"Manifiesto no válido: {exc}")
    st.stop()

col1, col2 = st.columns(2)
with col1:
    st.write("**Modelo:**", f"{manifest.model.name} {manifest.model.version}")
    st.write("**Nombre original:**", manifest.model.original_filename)
    st.write("**Algoritmo:**", manifest.encryption.algorithm)
with col2:
    st.write("**Referencia de clave:**", manifest.encryption.key_ref)
    st.write("**Nonce (hex):**", manifest.encryption.iv_hex)
    st.write("**Tag (hex):**", manifest.encryption.tag_hex)

st.markdown("### Manifiesto")
st.code(manifest_to_yaml(manifest), language="yaml")

key_hex = st.text_input("Clave AES-256 (hex) para autenticar y descifrar", type="password")

# Ejecuta las comprobaciones de integridad, con o sin clave.
try:
    key = decode_key_hex(key_hex) if key_hex else None
    report = verify_bundle(bundle_dir, key=key, manifest=manifest)
except TmpsError as exc:
    st.error(f"Error verificando: {exc}")
    st.stop()

st.write("**SHA-256 del cifrado:**", _mark(report.ciphertext_sha256_ok))
st.write("**Etiqueta GCM:**", _mark(report.authenticated))
st.write("**SHA-256 del claro:**", _mark(report.plaintext_sha256_ok))

# Ofrece el descifrado local y la descarga del modelo en claro.
if key is not None and st.button("🔓 Descifrar y preparar descarga del original"):
    try:
        plaintext = unpack_model_file(key, bundle_dir, manifest=manifest)
    except (AuthenticationError, IntegrityError) as exc:
        st.error(f"El paquete no supera la verificación: {exc}")
        st.stop()
    except TmpsError as exc:
        st.error(f"Error descifrando: {exc}")
        st.stop()

    st.success("Modelo descifrado correctamente.")
    st.download_button(
        "⬇️ Descargar modelo original",
        data=plaintext,
        file_name=manifest.model.original_filename or "modelo_recuperado",
        mime="application/octet-stream",
    )
    st.caption(f"SHA-256 del claro: {sha256_hex(plaintext)}")
