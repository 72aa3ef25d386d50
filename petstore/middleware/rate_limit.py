"""
Rate limiting por endpoint usando el limiter de slowapi guardado en app.state
"""
from fastapi import Request, HTTPException
from limits import parse
from slowapi.util import get_remote_address
from ..config import get_settings

def bucket_for(request: Request) -> str:
    """Método + plantilla de la ruta (/pets/{pet_id}), no la URL concreta."""
    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path
    return f"{request.method} {path}"

def apply_rate_limit(request: Request, limit: str):
    """
    Aplica rate limiting a un endpoint concreto.
    Uso: apply_rate_limit(request, "5/minute")

    Si el limiter no está configurado (por ejemplo, en tests) o `limit` está
    vacío, no hace nada.
    """
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None or not limit:
        return

    key = get_remote_address(request)
    item = parse(limit)
    # hit() incrementa el contador y devuelve False si ya se superó
    if not limiter.limiter.hit(item, key, bucket_for(request)):
        raise HTTPException(
            status_code=429,
            detail=f"Too many requests. Limit: {limit}. Try again later."
        )

def limit_writes(request: Request):
    """Dependencia para POST/PUT/DELETE. Desactivada salvo que RATE_LIMIT_WRITES tenga valor."""
    apply_rate_limit(request, get_settings().rate_limit_writes)
