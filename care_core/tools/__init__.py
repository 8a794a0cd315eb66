# Nombre de archivo: __init__.py
# Ubicación de archivo: care_core/tools/__init__.py
# Descripción: Herramientas de línea de comandos del dashboard
