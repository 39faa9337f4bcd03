"""Core: dominio, configuración y orquestación (sin detalles de I/O)."""
