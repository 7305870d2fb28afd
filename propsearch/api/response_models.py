"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class ChatRequest(BaseModel):
    message: Optional[str] = None


class PropertyOut(BaseModel):
    id: str
    project_id: str
    project_name: str
    status: str
    possession_date: str
    full_address: str
    pincode: str
    unit_type: str
    price: int
    bathrooms: int
    carpet_area: str
    about_property: str
    floor_plan_image: str
    property_images: list[str]


class ChatResponse(BaseModel):
    summary: str
    properties: list[PropertyOut]
    total_matches: int
    filters: dict[str, Any]


class SearchResponse(BaseModel):
    properties: list[PropertyOut]
    total_matches: int
    filters: dict[str, Any]


class HealthResponse(BaseModel):
    status: str
    loaded: bool
    properties: int
    merge_report: Optional[dict[str, int]] = None
