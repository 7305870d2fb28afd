"""
Property Search — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propsearch.assistant import PropertyAssistant
from propsearch.config import DATA_DIR, TABLE_FILES
from propsearch.data.store import PropertyStore
from propsearch.exceptions import LoadError
from propsearch.api.router_meta import router as meta_router
from propsearch.api.router_search import router as search_router


def create_app(data_dir: Optional[Path] = None, assistant: Optional[PropertyAssistant] = None) -> FastAPI:
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the snapshot before the server accepts requests."""
        print(f"  DATA_DIR = {data_dir}")
        for name in TABLE_FILES.values():
            path = data_dir / name
            print(f"    - {name}: {'found' if path.exists() else 'MISSING'}")

        store = PropertyStore(data_dir)
        try:
            await store.load()
        except LoadError as exc:
            # Serve empty results rather than refusing to start; POST /api/load retries
            print(f"  Warning: property load failed: {exc}")

        app.state.store = store
        app.state.assistant = assistant if assistant is not None else PropertyAssistant.from_config()

        if store.row_count() > 0:
            print(f"\nProperty Search ready — {store.row_count():,} properties\n")
        else:
            print("\nProperty Search ready — no properties loaded.\n")
        yield

    app = FastAPI(
        title="Property Search API",
        description="Natural-language search over joined real-estate project data",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(search_router)

    return app


app = create_app()
