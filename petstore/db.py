import logging
from urllib.parse import urlsplit, urlunsplit
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from .config import Settings

logger = logging.getLogger(__name__)


def redact_uri(uri: str) -> str:
    """Quita usuario/contraseña de la URI para poder loguearla."""
    parts = urlsplit(uri)
    if "@" not in parts.netloc:
        return uri
    hosts = parts.netloc.rsplit("@", 1)[1]
    return urlunsplit((parts.scheme, f"***@{hosts}", parts.path, parts.query, parts.fragment))


def open_client(settings: Settings) -> AsyncIOMotorClient:
    """Crea el cliente de Mongo. La conexión real es perezosa (primera operación)."""
    logger.info("Conectando a MongoDB en %s (db=%s)", redact_uri(settings.mongodb_uri), settings.db_name)
    return AsyncIOMotorClient(settings.mongodb_uri)


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.db_name]


def close_client(client: AsyncIOMotorClient) -> None:
    logger.info("Cerrando conexión a MongoDB")
    client.close()
