"""JSON body parsing as a FastAPI dependency.

A body parameter is parsed by FastAPI before any dependency runs. Routes that
must rate limit and check credentials first take their body through
:func:`json_body` instead, listed after those dependencies.
"""

from typing import Awaitable, Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def json_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that validates the raw request body as ``model``.

    Malformed JSON and schema violations both raise
    ``RequestValidationError``, so they get the usual 400 response.
    """

    async def parse(request: Request) -> ModelT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False)) from exc

    return parse
