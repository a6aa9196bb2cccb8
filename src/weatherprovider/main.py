from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from .contract import CURRENT_AND_FORECAST_PATH, content_uri
from .labels import ResourceLabelResolver
from .notifications import ChangeEvent, ChangeNotifier
from .provider import (
    InvalidUriError,
    MalformedBulkInsertError,
    WeatherContentProvider,
    get_column_set,
)
from .settings import AppSettings, load_settings

LOGGER = logging.getLogger(__name__)


def build_label_resolver(settings: AppSettings) -> ResourceLabelResolver:
    locale = settings.yaml.labels.locale
    if settings.labels_path is None:
        return ResourceLabelResolver(locale=locale)
    return ResourceLabelResolver.from_file(settings.labels_path, locale=locale)


def build_provider(settings: AppSettings) -> WeatherContentProvider:
    column_set = get_column_set(settings.yaml.provider.column_set)
    return WeatherContentProvider(
        column_set=column_set,
        authority=settings.yaml.provider.authority,
        notifier=ChangeNotifier(),
        label_resolver=build_label_resolver(settings),
    )


def _log_change(event: ChangeEvent) -> None:
    LOGGER.debug("Weather content changed: %s (#%d)", event.uri, event.sequence)


def _get_provider(request: Request) -> WeatherContentProvider:
    return request.app.state.provider


def _content_uri(provider: WeatherContentProvider, uri_path: str) -> str:
    return content_uri(provider.authority, uri_path)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(application: FastAPI):
        resolved = settings if settings is not None else load_settings()
        logging.getLogger("weatherprovider").setLevel(resolved.log_level)

        provider = build_provider(resolved)
        observer = provider.notifier.register(
            content_uri(provider.authority, "weather"),
            _log_change,
            notify_for_descendants=True,
        )

        application.state.settings = resolved
        application.state.provider = provider
        application.state.started_at_utc = datetime.now(timezone.utc)
        LOGGER.info(
            "Weather provider ready on '%s' with %s columns",
            provider.authority,
            provider.column_set.name,
        )

        try:
            yield
        finally:
            observer.close()

    application = FastAPI(title="Weather Content Provider", version="0.1.0", lifespan=lifespan)
    _register_routes(application)
    return application


def _register_routes(application: FastAPI) -> None:
    @application.get("/health", response_class=JSONResponse)
    async def health(request: Request) -> JSONResponse:
        provider = _get_provider(request)
        settings: AppSettings = request.app.state.settings
        return JSONResponse(
            {
                "status": "ok",
                "service": "weatherprovider",
                "environment": settings.env.weatherprovider_env,
                "column_set": provider.column_set.name,
                "authority": provider.authority,
                "cached": provider.cache.read() is not None,
                "change_count": provider.notifier.change_count,
                "started_at_utc": request.app.state.started_at_utc.isoformat(),
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            }
        )

    @application.get("/content/{uri_path:path}")
    async def query_content(
        request: Request,
        uri_path: str,
        projection: list[str] | None = Query(default=None),
    ) -> Response:
        provider = _get_provider(request)
        uri = _content_uri(provider, uri_path)
        try:
            cursor = provider.query(uri, projection)
        except InvalidUriError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

        if cursor is None:
            return Response(status_code=204)

        return JSONResponse(
            {
                "uri": uri,
                "columns": list(cursor.columns),
                "rows": [list(row) for row in cursor.rows()],
                "count": cursor.count,
            }
        )

    @application.post("/bulk/{uri_path:path}", response_class=JSONResponse)
    async def bulk_insert_content(
        request: Request,
        uri_path: str,
        records: list[dict[str, Any]] = Body(...),
    ) -> JSONResponse:
        provider = _get_provider(request)
        uri = _content_uri(provider, uri_path)
        try:
            count = provider.bulk_insert(uri, records)
        except InvalidUriError as exc:
            raise HTTPException(
                status_code=404,
                detail=f"{exc}; bulk insert is only supported on {CURRENT_AND_FORECAST_PATH}",
            ) from exc
        except MalformedBulkInsertError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return JSONResponse({"uri": uri, "count": count})

    @application.post("/content/{uri_path:path}", response_class=JSONResponse)
    async def insert_content(
        request: Request,
        uri_path: str,
        values: dict[str, Any] | None = Body(default=None),
    ) -> JSONResponse:
        provider = _get_provider(request)
        return JSONResponse({"uri": provider.insert(_content_uri(provider, uri_path), values)})

    @application.put("/content/{uri_path:path}", response_class=JSONResponse)
    async def update_content(
        request: Request,
        uri_path: str,
        values: dict[str, Any] | None = Body(default=None),
    ) -> JSONResponse:
        provider = _get_provider(request)
        return JSONResponse({"count": provider.update(_content_uri(provider, uri_path), values)})

    @application.delete("/content/{uri_path:path}", response_class=JSONResponse)
    async def delete_content(request: Request, uri_path: str) -> JSONResponse:
        provider = _get_provider(request)
        return JSONResponse({"count": provider.delete(_content_uri(provider, uri_path))})


app = create_app()
