"""
Meta endpoints: health, load retry.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from propsearch.data.store import PropertyStore
from propsearch.api.dependencies import get_store
from propsearch.api.response_models import HealthResponse
from propsearch.exceptions import LoadError

router = APIRouter(prefix="/api", tags=["meta"])


def _health(store: PropertyStore) -> HealthResponse:
    return HealthResponse(
        status="ok" if store.is_loaded else "empty",
        loaded=store.is_loaded,
        properties=store.row_count(),
        merge_report=store.report.to_dict() if store.report else None,
    )


@router.get("/health", response_model=HealthResponse)
def health(store: PropertyStore = Depends(get_store)):
    return _health(store)


@router.post("/load", response_model=HealthResponse)
async def load_data(store: PropertyStore = Depends(get_store)):
    """Retry a failed startup load. No-op once the snapshot exists."""
    try:
        await store.load()
    except LoadError as exc:
        raise HTTPException(503, f"Load failed: {exc}")
    return _health(store)
