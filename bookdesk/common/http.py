"""Request metrics middleware shared by every FastAPI app."""

from time import perf_counter

from fastapi import FastAPI, Request

from bookdesk.common.config import settings
from bookdesk.common.metrics import http_request_duration_seconds, http_requests_total


def install_request_metrics(app: FastAPI) -> None:
    """Record request count and latency for every HTTP call on `app`."""

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start = perf_counter()
        route = request.url.path
        method = request.method
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            route_obj = request.scope.get("route")
            if route_obj is not None and getattr(route_obj, "path", None):
                route = route_obj.path
            return response
        finally:
            elapsed = max(0.0, perf_counter() - start)
            http_request_duration_seconds.labels(
                service=settings.service_name,
                route=route,
                method=method,
            ).observe(elapsed)
            http_requests_total.labels(
                service=settings.service_name,
                route=route,
                method=method,
                status_code=str(status_code),
            ).inc()
