# carnet/services/api/errors.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from carnet.domain.errors import PersonError


async def person_error_handler(request: Request, exc: PersonError) -> JSONResponse:
    """PersonService failures -> {"detail": ..., "code": ...} with the mapped status."""
    return JSONResponse(
        status_code=int(exc.status),
        content={"detail": exc.message, "code": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PersonError, person_error_handler)
