from starlette.requests import Request
from starlette.responses import PlainTextResponse


async def health_check(request: Request) -> PlainTextResponse:
    """Liveness of the HTTP listener only; the database is not consulted.

    Mounted as a plain route without a method list so every verb, custom
    ones included, gets the same answer.
    """
    return PlainTextResponse("OK")
