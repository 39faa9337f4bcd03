"""Adaptadores de I/O (HTTP, ficheros).

Por qué:
- Implementan los contratos de `core.interfaces` con librerías concretas (httpx).
"""
