# Nombre de archivo: __init__.py
# Ubicación de archivo: care_core/services/__init__.py
# Descripción: Servicios de alto nivel del dashboard
