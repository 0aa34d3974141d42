"""
After-Dispatch Middleware

Fires the page.after_dispatch hook once the host has produced a response.
The response is returned unchanged whatever the subscribers do.
"""

import logging
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from metatags import database
from metatags.config import Settings, settings as default_settings
from metatags.context import RequestContext
from metatags.middleware.logging import request_id_var
from metatags.plugins.hooks import HOOK_AFTER_DISPATCH
from metatags.plugins.registry import PluginRegistry, plugin_registry

logger = logging.getLogger(__name__)

# Paths that never carry page meta tags
EXCLUDED_PATHS = frozenset({"/metrics", "/health", "/ready"})


class AfterDispatchMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        registry: PluginRegistry | None = None,
        session_factory: Callable[[], AsyncSession] | None = None,
        settings: Settings | None = None,
    ):
        super().__init__(app)
        self.registry = registry or plugin_registry
        self.session_factory = session_factory
        self.settings = settings or default_settings

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id_var.set(request.headers.get("X-Request-ID", str(uuid.uuid4())))

        response = await call_next(request)

        if request.url.path in EXCLUDED_PATHS or not 200 <= response.status_code < 300:
            return response

        context = RequestContext.from_request(request, response, self.settings)
        session_factory = self.session_factory or database.AsyncSessionLocal

        async with session_factory() as db:
            await self.registry.fire_hook(HOOK_AFTER_DISPATCH, {"context": context, "db": db})

        return response
