"""
Acceso a la colección de mascotas.

`PetRepository` es el contrato mínimo que usa el router; `MongoPetRepository`
lo implementa sobre una colección de Motor. Los documentos usan el id de la
mascota como `_id`, así que hay como mucho un documento por id.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Fallo operativo del almacén (conexión, timeout, escritura rechazada...)."""


class PetRepository(ABC):

    @abstractmethod
    async def find_all(self) -> List[Dict[str, Any]]:
        """Todos los documentos, en el orden del almacén."""

    @abstractmethod
    async def find_by_id(self, pet_id: str) -> Optional[Dict[str, Any]]:
        """Documento con ese id o None."""

    @abstractmethod
    async def save(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Crea o reemplaza el documento con `doc["_id"]` y lo devuelve."""

    @abstractmethod
    async def delete_by_id(self, pet_id: str) -> None:
        """Borra si existe; no es error que no exista."""

    @abstractmethod
    async def delete_all(self) -> None:
        """Borra todas las mascotas."""


class MongoPetRepository(PetRepository):
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def find_all(self) -> List[Dict[str, Any]]:
        try:
            return await self.collection.find().to_list(None)
        except PyMongoError as e:
            raise StoreError("find_all failed") from e

    async def find_by_id(self, pet_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one({"_id": pet_id})
        except PyMongoError as e:
            raise StoreError(f"find_by_id failed for {pet_id}") from e

    async def save(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        try:
            await self.collection.replace_one({"_id": doc["_id"]}, doc, upsert=True)
        except PyMongoError as e:
            raise StoreError(f"save failed for {doc['_id']}") from e
        return doc

    async def delete_by_id(self, pet_id: str) -> None:
        try:
            res = await self.collection.delete_one({"_id": pet_id})
        except PyMongoError as e:
            raise StoreError(f"delete failed for {pet_id}") from e
        if res.deleted_count == 0:
            logger.debug("delete_by_id: %s no existía", pet_id)

    async def delete_all(self) -> None:
        try:
            res = await self.collection.delete_many({})
        except PyMongoError as e:
            raise StoreError("delete_all failed") from e
        logger.info("Borradas %s mascotas", res.deleted_count)
