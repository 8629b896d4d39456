# --------------------------------------------------------------
# File: __init__.py
# Description: Paquete de la interfaz de línea de comandos `tmps`.
# --------------------------------------------------------------
"""Interfaz de línea de comandos del empaquetador de modelos."""
