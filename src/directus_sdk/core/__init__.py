"""Core del SDK: dominio, contratos, servicios, configuración y errores."""
