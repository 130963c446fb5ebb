from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.foods import router as foods_router
from app.api.invoices import router as invoices_router
from app.api.menus import router as menus_router
from app.api.order_items import router as order_items_router
from app.api.orders import router as orders_router
from app.api.tables import router as tables_router
from app.api.users import router as users_router
from app.errors import (
    AggregationFailedError,
    ConflictError,
    DecodeFailedError,
    InvalidRequestError,
    NotFoundError,
    OperationTimeoutError,
    PosError,
    StoreError,
)
from app.logging_config import configure_logging
from app.settings import get_settings

configure_logging(get_settings().log_level)

app = FastAPI(
    title="Restaurant POS API",
    version="0.1.0",
)

ERROR_STATUS = (
    (NotFoundError, 404),
    (InvalidRequestError, 400),
    (ConflictError, 409),
    (OperationTimeoutError, 504),
    (AggregationFailedError, 500),
    (DecodeFailedError, 500),
    (StoreError, 500),
)


@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError) -> JSONResponse:
    status_code = 500
    for kind, code in ERROR_STATUS:
        if isinstance(exc, kind):
            status_code = code
            break
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(menus_router)
app.include_router(foods_router)
app.include_router(tables_router)
app.include_router(orders_router)
app.include_router(order_items_router)
app.include_router(invoices_router)
app.include_router(users_router)
