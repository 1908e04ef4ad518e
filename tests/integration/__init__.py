"""
Integration tests package.

Tests de integración que verifican el funcionamiento correcto de:
- Health checks (liveness, base de datos, readiness)
- Registro de reconciliaciones sobre SQLite

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
