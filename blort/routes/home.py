from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

home_route = APIRouter()


@home_route.get("/", response_class=PlainTextResponse)
async def hello_world() -> str:
    return "Hello, world!"


@home_route.get("/ok", response_class=PlainTextResponse)
async def health_check() -> str:
    """Liveness probe; does not touch the database."""
    return "OK"
