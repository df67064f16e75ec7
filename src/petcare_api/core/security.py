# src/petcare_api/core/security.py
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from petcare_api.core.config import Settings, get_settings

_API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=True)


async def get_user_id(
    api_key: str = Security(_API_KEY_HEADER),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    FastAPI Dependency für die Amazon-Routen: löst den X-API-Key auf den
    Tierhalter auf, dem Klicks auf Affiliate-Links zugeordnet werden.
    Die Produktsuche selbst ist nicht pro User (Cache und Cooldown sind global).
    Wirft HTTP 401 bei unbekanntem Key.
    """
    user_id = settings.api_keys.get(api_key)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key.",
            headers={"WWW-Authenticate": "ApiKey"},
        )
    return user_id
