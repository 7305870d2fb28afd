"""Language-model collaborators: free-text query → criteria, results → prose.

Both calls degrade instead of failing the request: a parse failure yields
empty criteria (search everything) and a summary failure yields a fixed
apology text.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from propsearch.config import (
    LLM_API_KEY, LLM_BASE_URL, LLM_MODEL, PARSE_TEMPERATURE, SUMMARY_TEMPERATURE,
)
from propsearch.data.schemas import FilterCriteria, Property

NO_RESULTS_SUMMARY = (
    "No properties matched your criteria. You could try expanding your search, "
    "for example, by increasing your budget or looking in a nearby locality."
)
SUMMARY_UNAVAILABLE = (
    "I found some properties for you, but I'm having trouble summarizing them at the moment."
)

PARSE_PROMPT = """You are an expert real estate query parser. Your job is to extract filter criteria
from a user query and return them as a JSON object.
The user query is: "{query}"

Please extract the following fields:
- city (string): The city name.
- bhk (number): The number of bedrooms (e.g., 2BHK -> 2).
- budget (number): The budget. IMPORTANT: Convert all budgets to a single integer in Indian Rupees.
  For example: '1.2 Cr' becomes 12000000, '50 L' becomes 5000000, '90 Lakhs' becomes 9000000.
- possessionStatus (string): Either 'Ready' or 'Under Construction'.
  Infer this from terms like 'ready to move' or 'under construction'.
- locality (string): Any specific neighborhoods or areas mentioned.

Rules:
1. Only include a field in the JSON if the user explicitly mentions it.
2. If a field is not mentioned, DO NOT include it in the JSON.
3. DO NOT assume default values.
4. The output MUST be a single, valid JSON object.
5. If no filters are found, return an empty JSON object {{}}."""

SUMMARY_PROMPT = """You are a helpful real estate assistant. I have just run a search for a user
who asked: "{query}"
I found the following properties (as a JSON array):
{properties}
Please generate a short, 2-4 sentence summary of these results.
Rules:
1. Be helpful and professional.
2. The summary MUST be grounded only in the data provided.
3. DO NOT make up any details, amenities, or property names.
4. Highlight a key trend (e.g., "I found 5 properties, most of which are in the Wakad area...").
5. Do not just list the properties. Summarize them."""


def build_client(api_key: str = LLM_API_KEY, base_url: str = LLM_BASE_URL) -> Any:
    """AsyncOpenAI client for the configured endpoint, or None without a key."""
    if not api_key:
        return None
    from openai import AsyncOpenAI
    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def simplify(properties: Sequence[Property]) -> list[dict[str, Any]]:
    """The fields the summary prompt sees."""
    return [
        {
            "name": p.project_name,
            "address": p.full_address,
            "bhk": p.unit_type,
            "price": p.price,
            "status": p.status,
        }
        for p in properties
    ]


class PropertyAssistant:
    """Wraps a chat-completions client for query parsing and summaries."""

    def __init__(self, client: Any = None, model: str = LLM_MODEL) -> None:
        self.client = client
        self.model = model

    @classmethod
    def from_config(cls) -> "PropertyAssistant":
        client = build_client()
        if client is None:
            print("  Warning: GROQ_API_KEY not set; queries will not be parsed or summarized")
        return cls(client)

    async def _complete(self, prompt: str, temperature: float, json_mode: bool = False) -> Optional[str]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "system", "content": prompt}],
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = await self.client.chat.completions.create(**kwargs)
        return response.choices[0].message.content

    async def parse_query(self, query: str) -> FilterCriteria:
        """Extract search criteria from a free-text message."""
        if self.client is None:
            return FilterCriteria()
        try:
            content = await self._complete(PARSE_PROMPT.format(query=query), PARSE_TEMPERATURE, json_mode=True)
        except Exception as exc:
            print(f"  Warning: query parsing failed: {exc}")
            return FilterCriteria()

        if not content:
            return FilterCriteria()
        print(f"  Parse response: {content}")
        try:
            payload = json.loads(content)
        except ValueError:
            print(f"  Warning: query parser returned invalid JSON: {content[:200]}")
            return FilterCriteria()
        if not isinstance(payload, dict):
            return FilterCriteria()
        return FilterCriteria.from_mapping(payload)

    async def summarize(self, query: str, properties: Sequence[Property]) -> str:
        """Short prose synopsis of the matched properties."""
        if not properties:
            return NO_RESULTS_SUMMARY
        if self.client is None:
            return SUMMARY_UNAVAILABLE

        prompt = SUMMARY_PROMPT.format(query=query, properties=json.dumps(simplify(properties)))
        try:
            content = await self._complete(prompt, SUMMARY_TEMPERATURE)
        except Exception as exc:
            print(f"  Warning: summary generation failed: {exc}")
            return SUMMARY_UNAVAILABLE
        return content or SUMMARY_UNAVAILABLE
