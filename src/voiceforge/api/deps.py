"""FastAPI dependencies for gateway access."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from voiceforge.service import VoiceForge


async def get_forge(request: Request) -> VoiceForge:
    """Get the gateway service from app state.

    Raises:
        HTTPException: 503 if the service failed to initialize
    """
    forge: VoiceForge | None = getattr(request.app.state, "forge", None)

    if forge is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error": "Voice service unavailable",
                "code": "SERVICE_UNAVAILABLE",
            },
        )

    return forge


# Type alias for cleaner signatures
Forge = Annotated[VoiceForge, Depends(get_forge)]
