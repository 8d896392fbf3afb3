import uuid

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from receipt_points.config import load_settings
from receipt_points.log import configure_logging
from receipt_points.schemas.receipt import (
    ErrorResponse,
    PointsResponse,
    ProcessReceiptRequest,
    ProcessReceiptResponse,
)
from receipt_points.scoring.points import calculate_points
from receipt_points.store.memory import InMemoryReceiptStore, ReceiptNotFoundError, ReceiptStore

NOT_FOUND_MESSAGE = "No receipt found for that id"

settings = load_settings()
configure_logging(settings.log_level)

logger = structlog.get_logger()

app = FastAPI(title="Receipt Points")

_store = InMemoryReceiptStore()


def get_store() -> ReceiptStore:
    return _store


def format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def reject_invalid_receipt(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc)
    logger.info("receipt_rejected", path=request.url.path, reason=message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.post(
    "/receipt/process",
    response_model=ProcessReceiptResponse,
    responses={400: {"model": ErrorResponse}},
)
def process_receipt(payload: ProcessReceiptRequest, store: ReceiptStore = Depends(get_store)):
    receipt_id = str(uuid.uuid4())
    points = calculate_points(payload)
    store.insert(payload.to_receipt(receipt_id, points))

    logger.info("receipt_processed", id=receipt_id, points=points)
    return ProcessReceiptResponse(id=receipt_id)


@app.get(
    "/receipt/{receipt_id}/points",
    response_model=PointsResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_points(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    try:
        receipt = store.find_by_id(receipt_id)
    except ReceiptNotFoundError:
        logger.info("receipt_not_found", id=receipt_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return PointsResponse(points=receipt.points)


def main() -> None:
    import uvicorn

    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run("receipt_points.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
