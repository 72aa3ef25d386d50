from typing import Any, Dict, Optional
from pydantic import BaseModel


class PetIn(BaseModel):
    id: Optional[str] = None
    name: str
    species: str
    breed: str


class PetOut(BaseModel):
    id: str
    name: str
    species: str
    breed: str


def to_document(pet_id: str, payload: PetIn) -> Dict[str, Any]:
    """Forma persistida: el id de la mascota va en `_id` como string plano."""
    return {
        "_id": pet_id,
        "name": payload.name,
        "species": payload.species,
        "breed": payload.breed,
    }


def to_out(doc: Dict[str, Any]) -> Dict[str, Any]:
    # documentos antiguos pueden no tener todos los campos
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name") or "",
        "species": doc.get("species") or "",
        "breed": doc.get("breed") or "",
    }
