from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from blort.database.database import get_registry
from blort.services.crud.visit import VisitRegistry
from blort.services.errors import ConstraintViolation, InvalidInput, RegistryError, StoreUnavailable
from blort.services.greeting import build_greeting
from blort.services.logging.logging import get_logger

logger = get_logger(logger_name=__name__)

hello_route = APIRouter()

_ERROR_STATUS = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    ConstraintViolation: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# Sync handler: executed in the threadpool
@hello_route.get("/hello/{name}", response_class=PlainTextResponse)
def hello_name(name: str, registry: VisitRegistry = Depends(get_registry)) -> str:
    """
    Records a visit for `name` and greets them with their previous history.

    Raises:
        HTTPException: 400 for an unusable name
        HTTPException: 503 if the database is unavailable
        HTTPException: 500 if the database rejected the write
    """
    try:
        result = registry.record_visit(name)
    except RegistryError as e:
        logger.error(f"Error recording visit for {name!r}: {e}")
        raise HTTPException(
            status_code=_ERROR_STATUS.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR),
            detail=str(e),
        )

    return build_greeting(name, result)
