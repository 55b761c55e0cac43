"""
PawMart Backend — Liveness Route
==================================

What:  GET / answers a plain-text acknowledgement.
Why:   Hosting platforms (and humans with curl) probe the root path to check
       that the process is up. It touches neither MongoDB nor Firebase, so it
       answers even when both are unconfigured.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])

LIVENESS_MESSAGE = "Paw Mart backend — OK"


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness acknowledgement",
)
async def root() -> str:
    return LIVENESS_MESSAGE
