import logging
from typing import Any, Dict, List
from bson import ObjectId
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from ..middleware.rate_limit import limit_writes
from ..repository import PetRepository, StoreError
from ..schemas.pet import PetIn, PetOut, to_document, to_out

logger = logging.getLogger(__name__)

DELETED_ONE = "Pet has been deleted!"
DELETED_ALL = "Pets has been deleted!"
DELETE_FAILED = "Fail to delete!"


def get_repository(request: Request) -> PetRepository:
    """El repositorio vive en app.state (lo crea el lifespan de main)."""
    return request.app.state.pet_repository


def new_pet_id() -> str:
    return str(ObjectId())


async def list_pets(repo: PetRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    docs = await repo.find_all()
    return [to_out(d) for d in docs]


async def get_pet(pet_id: str, repo: PetRepository = Depends(get_repository)):
    doc = await repo.find_by_id(pet_id)
    if doc is None:
        # no es un error: 404 sin cuerpo
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return to_out(doc)


async def create_pet(payload: PetIn, repo: PetRepository = Depends(get_repository)):
    pet_id = payload.id or new_pet_id()
    saved = await repo.save(to_document(pet_id, payload))
    logger.info("Mascota creada %s", pet_id)
    return to_out(saved)


async def modify_pet(
    pet_id: str,
    payload: PetIn,
    repo: PetRepository = Depends(get_repository),
):
    # el id del path manda: cualquier id del body se descarta
    await repo.save(to_document(pet_id, payload))
    return Response(status_code=status.HTTP_200_OK)


async def delete_pet(pet_id: str, repo: PetRepository = Depends(get_repository)):
    try:
        await repo.delete_by_id(pet_id)
    except StoreError:
        logger.exception("No se pudo borrar la mascota %s", pet_id)
        return PlainTextResponse(DELETE_FAILED, status_code=status.HTTP_417_EXPECTATION_FAILED)
    return PlainTextResponse(DELETED_ONE)


async def delete_all_pets(repo: PetRepository = Depends(get_repository)):
    try:
        await repo.delete_all()
    except StoreError:
        logger.exception("No se pudieron borrar las mascotas")
        return PlainTextResponse(DELETE_FAILED, status_code=status.HTTP_417_EXPECTATION_FAILED)
    return PlainTextResponse(DELETED_ALL)


# (método, path, handler, opciones). /all va antes que /{pet_id}.
ROUTES = [
    ("GET", "", list_pets, {"response_model": List[PetOut]}),
    ("GET", "/{pet_id}", get_pet, {"response_model": PetOut, "responses": {404: {"description": "Pet not found"}}}),
    ("POST", "", create_pet, {"response_model": PetOut, "dependencies": [Depends(limit_writes)]}),
    ("PUT", "/{pet_id}", modify_pet, {"dependencies": [Depends(limit_writes)]}),
    ("DELETE", "/all", delete_all_pets, {"response_class": PlainTextResponse, "dependencies": [Depends(limit_writes)]}),
    ("DELETE", "/{pet_id}", delete_pet, {"response_class": PlainTextResponse, "dependencies": [Depends(limit_writes)]}),
]

router = APIRouter()
for method, path, handler, options in ROUTES:
    router.add_api_route(path, handler, methods=[method], **options)
