# --------------------------------------------------------------
# File: 1_Empaquetar_Modelo.py
# Description: Gestiona la carga y el empaquetado cifrado de modelos mediante Streamlit.
# --------------------------------------------------------------

import os
import tempfile

import streamlit as st

from tmps_core import config
from tmps_core.errors import TmpsError
from tmps_core.keys import decode_key_hex
from tmps_core.manifest import MANIFEST_FILENAME, manifest_to_yaml
from tmps_core.models import ModelInfo
from tmps_core.package import package_model_file
from tmps_core.storage import secure_name, write_manifest_to_yaml


# Presenta el título de la sección dedicada al empaquetado.
st.title("📦 Empaquetar modelo")

# Permite seleccionar el modelo y rellenar sus metadatos.
f = st.file_uploader("Selecciona el archivo del modelo", type=None)
model_id = st.text_input("ID del modelo")
name = st.text_input("Nombre")
version = st.text_input("Versión")
model_format = st.text_input("Formato", value=config.DEFAULT_MODEL_FORMAT)
key_ref = st.text_input("Referencia de la clave", value=config.DEFAULT_KEY_REF)
key_hex = st.text_input("Clave AES-256 (hex, 64 caracteres)", type="password")

if f and st.button("Cifrar con AES-256-GCM"):
    bundle_name = secure_name(model_id)
    if not (bundle_name and name and version and key_hex):
        st.warning("ID válido, nombre, versión y clave son obligatorios.")
        st.stop()

    bundle_dir = os.path.join(config.STORAGE_PATH, "bundles", bundle_name)
    model_info = ModelInfo(
        id=model_id,
        name=name,
        version=version,
        format=model_format,
        original_filename=f.name,
    )

    try:
        key = decode_key_hex(key_hex)
        # El pipeline trabaja sobre rutas: se vuelca la subida a un temporal.
        with tempfile.TemporaryDirectory() as tmp_dir:
            src_path = os.path.join(tmp_dir, secure_name(f.name) or "model.bin")
            with open(src_path, "wb") as out:
                out.write(f.getvalue())
            manifest = package_model_file(key, src_path, bundle_dir, model_info, key_ref)
        manifest_path = write_manifest_to_yaml(manifest, os.path.join(bundle_dir, MANIFEST_FILENAME))
    except TmpsError as exc:
        st.error(f"Error empaquetando: {exc}")
        st.stop()

    enc = manifest.encryption
    st.success("Modelo cifrado (AES-256-GCM).")
    st.code(
        f"{enc.algorithm} | nonce={len(enc.iv_hex) * 4} bits | tag={len(enc.tag_hex) * 4} bits\n"
        f"backend={enc.backend} | key_ref={enc.key_ref}"
    )

    # Muestra el manifiesto y ofrece su descarga.
    manifest_yaml = manifest_to_yaml(manifest)
    st.markdown("### Manifiesto")
    st.code(manifest_yaml, language="yaml")
    st.download_button(
        "⬇️ Descargar manifiesto",
        data=manifest_yaml,
        file_name=MANIFEST_FILENAME,
        mime="application/x-yaml",
    )

    st.success(f"Guardado en: {os.path.join(bundle_dir, enc.ciphertext_file)}")
    st.caption(f"Manifiesto: {manifest_path}")
