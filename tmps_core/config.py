# --------------------------------------------------------------
# File: config.py
# Description: Valores por defecto configurables mediante entorno o archivo .env.
# --------------------------------------------------------------
import os

from dotenv import load_dotenv

load_dotenv()

# Variable de entorno de la que la CLI lee la clave si no se pasa --key-hex.
KEY_HEX_ENV = "TMPS_KEY_HEX"

DEFAULT_KEY_REF = os.getenv("TMPS_KEY_REF", "model-key-001")
DEFAULT_MODEL_FORMAT = os.getenv("TMPS_MODEL_FORMAT", "onnx")
STORAGE_PATH = os.getenv("STORAGE_PATH", "./_data")
