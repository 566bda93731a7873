"""
FastAPI Adapter for ROUTEBIND

Builds Routes from FastAPI requests, exposes binding as a dependency and
answers binding failures with 404.

Example:
    from fastapi import Depends, FastAPI
    from routebind.adapters.fastapi import Bound, install

    app = install(FastAPI())

    @app.get("/users/{user}/dogs/{dog}")
    def show(page: DogPage = Depends(Bound(DogPage, scoped=True))):
        return {"dog": page.dog.name}
"""

import inspect
import logging
from typing import Any, Mapping, Optional, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from routebind.binder import Binder
from routebind.config import Config, get_config
from routebind.contracts import Resolver
from routebind.db import db
from routebind.exceptions import NotFoundError
from routebind.logging import configure_from
from routebind.route import Route, using_route

logger = logging.getLogger(__name__)


def route_from_request(request: Request, **options) -> Route:
    """
    Build a Route from the request's path parameters.

    Starlette captures path parameters in path order, which is the order
    parent/child inference relies on.

    Args:
        request: The incoming request (after routing)
        **options: scoped / with_trashed / binding_fields / config for Route
    """
    matched = request.scope.get("route")
    pattern = getattr(matched, "path", None)
    return Route(dict(request.path_params), pattern=pattern, **options)


def Bound(
    target: Any,
    method: Optional[str] = None,
    *,
    scoped: Optional[bool] = None,
    with_trashed: Optional[bool] = None,
    binding_fields: Optional[Mapping[str, str]] = None,
    container: Optional[Resolver] = None,
):
    """
    FastAPI dependency that binds *target* against the current request.

    Without *method* the dependency yields ``Binder.make(target)``; with it,
    the return value of ``Binder.call(target, method)``, awaited when the
    method is a coroutine function.

    Lookups use the request's own session (see DatabaseManager.request_scope).

    Example:
        @app.get("/users/{user}")
        def show(user_page: UserPage = Depends(Bound(UserPage))):
            ...

        @app.get("/users/{user}/dogs/{dog}")
        def dog(result = Depends(Bound(DogController, "show", scoped=True))):
            return result
    """
    async def dependency(request: Request):
        route = route_from_request(
            request,
            scoped=scoped,
            with_trashed=with_trashed,
            binding_fields=binding_fields,
        )
        with using_route(route):
            if method is None:
                return Binder.make(target, route=route, container=container)
            result = Binder.call(target, method, route=route, container=container)
            if inspect.isawaitable(result):
                result = await result
            return result

    label = getattr(target, "__name__", type(target).__name__)
    dependency.__name__ = f"bind_{label}" + (f"_{method}" if method else "")
    return dependency


def install(app: FastAPI, config: Optional[Type[Config]] = None) -> FastAPI:
    """
    Register ROUTEBIND's exception handlers and session cleanup on *app*.

    - EnumCaseNotFound / ModelNotFound answer with
      ``{"error": "Not Found", "detail": ...}`` and Config.NOT_FOUND_STATUS
    - every request gets its own lookup session (db.request_scope)
    - the routebind logger follows Config.LOG_LEVEL

    Returns:
        The same app, for chaining
    """
    settings = config or get_config()
    status_code = settings.NOT_FOUND_STATUS
    configure_from(settings)

    async def not_found(request: Request, exc: NotFoundError):
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"error": "Not Found", "detail": str(exc)},
        )

    # Handlers are looked up along the exception's MRO
    app.add_exception_handler(NotFoundError, not_found)

    @app.middleware("http")
    async def release_session(request: Request, call_next):
        with db.request_scope():
            return await call_next(request)

    if settings.VERBOSE_LOGGING:
        logger.info("[OK] routebind installed on FastAPI app")

    return app


__all__ = ["Bound", "install", "route_from_request"]
