"""Servicios tipados sobre el `Transport`.

Cada servicio cubre un grupo de endpoints REST/GraphQL de Directus y solo
depende de los contratos de `core.interfaces`.
"""

from directus_sdk.core.services.auth import AuthService
from directus_sdk.core.services.files import FilesService
from directus_sdk.core.services.graphql import GraphQLService
from directus_sdk.core.services.items import ItemsService
from directus_sdk.core.services.roles import RolesService
from directus_sdk.core.services.users import UsersService
from directus_sdk.core.services.utils import UtilsService

__all__ = [
    "AuthService",
    "FilesService",
    "GraphQLService",
    "ItemsService",
    "RolesService",
    "UsersService",
    "UtilsService",
]
