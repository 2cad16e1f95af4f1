"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los value objects del pipeline (comando, parámetros, resultados).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""
