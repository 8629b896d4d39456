# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del flujo.
# --------------------------------------------------------------

import streamlit as st

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="Praesago TMPS", page_icon="🔐", layout="centered")

# Presenta el nombre del producto y su propósito general.
st.title("🔐 Praesago TMPS")
st.write(
    "Empaqueta modelos de ML con AES-256-GCM y genera un manifiesto YAML "
    "con los parámetros de cifrado y los SHA-256 del claro y del cifrado."
)
st.info("Ve a **Empaquetar modelo** para cifrar un archivo o a **Verificar y descifrar** para restaurarlo.")
