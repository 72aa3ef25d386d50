"""
Configuración de pytest para tests
"""
import pytest
from fastapi.testclient import TestClient

from petstore.main import app
from petstore.repository import PetRepository, StoreError
from petstore.routers.pets import get_repository


class InMemoryPetRepository(PetRepository):
    """Almacén en memoria con la misma semántica que el de Mongo."""

    def __init__(self):
        self.docs = {}

    async def find_all(self):
        return [dict(d) for d in self.docs.values()]

    async def find_by_id(self, pet_id):
        doc = self.docs.get(pet_id)
        return dict(doc) if doc is not None else None

    async def save(self, doc):
        self.docs[doc["_id"]] = dict(doc)
        return doc

    async def delete_by_id(self, pet_id):
        self.docs.pop(pet_id, None)

    async def delete_all(self):
        self.docs.clear()


class BrokenPetRepository(InMemoryPetRepository):
    """Simula un almacén caído: toda operación falla."""

    async def find_all(self):
        raise StoreError("down")

    async def find_by_id(self, pet_id):
        raise StoreError("down")

    async def save(self, doc):
        raise StoreError("down")

    async def delete_by_id(self, pet_id):
        raise StoreError("down")

    async def delete_all(self):
        raise StoreError("down")


@pytest.fixture(autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    previous = app.state.limiter
    app.state.limiter = None
    yield
    app.state.limiter = previous


@pytest.fixture
def repo():
    return InMemoryPetRepository()


@pytest.fixture
def client(repo):
    """Cliente de test con el repositorio en memoria inyectado"""
    app.dependency_overrides[get_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_repository] = lambda: BrokenPetRepository()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def rex():
    return {"name": "Rex", "species": "dog", "breed": "lab"}
