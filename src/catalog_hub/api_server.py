from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Literal, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from catalog_hub import __version__
from catalog_hub.catalog import (
    CatalogRegistry,
    FilterSpec,
    UnknownCatalogError,
    get_catalog_registry,
)
from catalog_hub.config import Settings

logger = logging.getLogger(__name__)

SortParam = Literal["popularity", "recency", "name", "likes", "usability"]


def _registry(request: Request) -> CatalogRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        registry = get_catalog_registry()
        request.app.state.registry = registry
    return registry


def _unknown_catalog(name: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Unknown catalog: {name}")


def create_app(
    registry: Optional[CatalogRegistry] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the catalog API. Without a registry the default one is used lazily."""
    settings = settings or Settings()
    app = FastAPI(title="Catalog Hub API", version=__version__)
    app.state.registry = registry

    cors_origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins else ["*"],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True, "version": __version__}

    @app.get("/catalogs")
    async def list_catalogs(request: Request) -> Dict[str, Any]:
        return {"success": True, "catalogs": _registry(request).describe()}

    @app.get("/catalogs/{name}")
    async def query_catalog(
        request: Request,
        name: str,
        search: Optional[str] = Query(default=None, max_length=300),
        category: Optional[str] = None,
        tags: Optional[str] = Query(default=None, description="Comma-separated, all must match"),
        min_popularity: int = Query(default=0, ge=0, alias="minPopularity"),
        sort_by: SortParam = Query(default="popularity", alias="sortBy"),
        refresh: bool = False,
        source: Optional[str] = None,
        limit: Optional[int] = Query(default=None, ge=1, le=1000),
        framework: Optional[str] = None,
        is_fine_tuned: Optional[bool] = Query(default=None, alias="isFineTuned"),
        is_tabular: Optional[bool] = Query(default=None, alias="isTabular"),
    ) -> Dict[str, Any]:
        registry = _registry(request)
        spec = FilterSpec.from_params(
            search=search,
            category=category,
            tags=tags,
            min_popularity=min_popularity,
            sort_by=sort_by,
            source=source,
            limit=limit,
            framework=framework,
            is_fine_tuned=is_fine_tuned,
            is_tabular=is_tabular,
        )
        try:
            entries = await registry.query_catalog(name, spec, force_refresh=refresh)
        except UnknownCatalogError:
            raise _unknown_catalog(name) from None

        cache = registry.cache(name)
        return {
            "success": True,
            "catalog": name,
            "count": len(entries),
            "lastUpdated": cache.last_updated.isoformat(),
            "fromFallback": cache.state.from_fallback,
            "filters": spec.to_dict(),
            "entries": [entry.to_dict() for entry in entries],
        }

    @app.get("/catalogs/{name}/status")
    async def catalog_status(request: Request, name: str) -> Dict[str, Any]:
        try:
            cache = _registry(request).cache(name)
        except UnknownCatalogError:
            raise _unknown_catalog(name) from None
        return {"success": True, **cache.status()}

    return app


app = create_app(settings=Settings.from_env())


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger.info(f"Catalog Hub API v{__version__} on {settings.api_host}:{settings.api_port}")
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, reload=False)


if __name__ == "__main__":
    main()
