"""
FastAPI dependencies — store and assistant handles, criteria parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query, Request

from propsearch.assistant import PropertyAssistant
from propsearch.data.schemas import FilterCriteria
from propsearch.data.store import PropertyStore


# ---------------------------------------------------------------------------
# Handles owned by the app (set during startup)
# ---------------------------------------------------------------------------

def get_store(request: Request) -> PropertyStore:
    """The app's store, loaded or not. An unloaded store reads as empty."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(503, "Server not initialized yet")
    return store


def get_assistant(request: Request) -> PropertyAssistant:
    assistant = getattr(request.app.state, "assistant", None)
    if assistant is None:
        raise HTTPException(503, "Server not initialized yet")
    return assistant


# ---------------------------------------------------------------------------
# Criteria parsing from query params
# ---------------------------------------------------------------------------

def parse_criteria(
    city: Optional[str] = Query(None, description="City name, matched within the address"),
    bhk: Optional[str] = Query(None, description="Bedroom count, e.g. 3"),
    budget: Optional[int] = Query(None, description="Maximum price in rupees"),
    status: Optional[str] = Query(None, description="Ready | Under Construction"),
    locality: Optional[str] = Query(None, description="Neighbourhood, matched within the address"),
) -> FilterCriteria:
    """Parse search query parameters into FilterCriteria."""
    return FilterCriteria(
        city=city,
        unit_type=bhk,
        max_price=budget,
        possession_status=status,
        locality=locality,
    )
