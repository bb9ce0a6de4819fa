"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2 + enums).
- El dominio no conoce ccxt, HTTP ni la CLI: solo conceptos del problema.
"""
