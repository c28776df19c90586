"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: los servicios dependen de `Transport` y
  `TokenStore`, no de httpx ni de un backend de almacenamiento.
"""

from directus_sdk.core.interfaces.token_store import TokenStore
from directus_sdk.core.interfaces.transport import Transport

__all__ = ["TokenStore", "Transport"]
