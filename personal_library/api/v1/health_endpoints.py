"""
Operational endpoints.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from personal_library.api.v1.dependencies import get_document_store
from personal_library.infrastructure.db import SqliteDocumentStore

router = APIRouter()


@router.get("/health")
def health_check(
    store: SqliteDocumentStore = Depends(get_document_store),
) -> JSONResponse:
    """
    Report whether the document store answers.

    Returns 200 when the store is reachable and 503 otherwise.
    """
    store_ok = store.ping()
    return JSONResponse(
        status_code=status.HTTP_200_OK if store_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ok" if store_ok else "degraded", "store": store_ok},
    )
