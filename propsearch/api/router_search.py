"""
Search endpoints: natural-language chat and structured property search.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from propsearch.assistant import PropertyAssistant
from propsearch.config import MAX_RESULTS
from propsearch.data.schemas import FilterCriteria
from propsearch.data.store import PropertyStore
from propsearch.api.dependencies import get_assistant, get_store, parse_criteria
from propsearch.api.response_models import ChatRequest, ChatResponse, PropertyOut, SearchResponse
from propsearch.search import filter_properties, limit_results

router = APIRouter(prefix="/api", tags=["search"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    store: PropertyStore = Depends(get_store),
    assistant: PropertyAssistant = Depends(get_assistant),
):
    """Parse a free-text query, filter the snapshot, and summarize the matches."""
    message = (body.message or "").strip()
    if not message:
        raise HTTPException(400, "No message provided.")

    print(f"Received message: {message}")
    criteria = await assistant.parse_query(message)
    print(f"  Parsed filters: {criteria.as_dict()}")

    matches = filter_properties(store.get_all(), criteria)
    print(f"  Found {len(matches):,} matching properties")

    summary = await assistant.summarize(message, matches)
    return ChatResponse(
        summary=summary,
        properties=[PropertyOut(**p.to_dict()) for p in limit_results(matches, MAX_RESULTS)],
        total_matches=len(matches),
        filters=criteria.as_dict(),
    )


@router.get("/properties", response_model=SearchResponse)
def search_properties(
    criteria: FilterCriteria = Depends(parse_criteria),
    limit: int = Query(MAX_RESULTS, ge=1, le=100, description="Maximum properties returned"),
    store: PropertyStore = Depends(get_store),
):
    """Structured search without the language model."""
    matches = filter_properties(store.get_all(), criteria)
    return SearchResponse(
        properties=[PropertyOut(**p.to_dict()) for p in limit_results(matches, limit)],
        total_matches=len(matches),
        filters=criteria.as_dict(),
    )
