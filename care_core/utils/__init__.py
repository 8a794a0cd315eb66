# Nombre de archivo: __init__.py
# Ubicación de archivo: care_core/utils/__init__.py
# Descripción: Utilidades de formato compartidas
