"""Modelos y entidades del dominio.

Por qué:
- Aquí viven la taxonomía de errores, los cuerpos de petición (Pydantic v2)
  y las formas de respuesta tipadas.
- El dominio no conoce HTTP ni CLI: solo conceptos del problema.
"""
