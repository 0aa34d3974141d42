"""
Middleware and Request Context Tests

The after-dispatch middleware is mounted on a small FastAPI app standing in
for the host CMS. Requests go through httpx's ASGI transport so the
middleware, the plugin and the database share one event loop.
"""

import json
import logging

import httpx
import pytest
from conftest import TestSessionLocal
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from metatags.context import RequestContext, document_type, normalize_extension, set_page_options
from metatags.middleware.dispatch import AfterDispatchMiddleware
from metatags.middleware.logging import RequestIdFilter, StructuredFormatter, request_id_var
from metatags.plugins.base import PluginBase, PluginMeta
from metatags.plugins.hooks import HOOK_AFTER_DISPATCH
from metatags.plugins.metatags_plugin import MetaTagsPlugin
from metatags.plugins.registry import PluginRegistry
from metatags.schemas.config import MetaTagsConfig
from metatags.services.metatags_service import MetaTagsService
from metatags.services.tag_store import TagStore


class ContextRecorder(PluginBase):
    def __init__(self, fail=False):
        self.fail = fail
        self.contexts: list[RequestContext] = []
        self.request_ids: list[str] = []

    @property
    def meta(self) -> PluginMeta:
        return PluginMeta(name="recorder", version="1.0.0", description="records contexts", hooks=[HOOK_AFTER_DISPATCH])

    async def handle_hook(self, hook_name, payload):
        self.contexts.append(payload["context"])
        self.request_ids.append(request_id_var.get())
        if self.fail:
            raise RuntimeError("plugin crashed")


class FakeSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


def build_app(registry, settings, session_factory=FakeSession) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        AfterDispatchMiddleware,
        registry=registry,
        session_factory=session_factory,
        settings=settings,
    )

    @app.get("/articles/{article_id}")
    async def read_article(article_id: int, request: Request):
        set_page_options(request, "com_content", view="article", id=article_id, Itemid="101")
        return HTMLResponse(f"<html><body>Article {article_id}</body></html>")

    @app.get("/page")
    async def page():
        return HTMLResponse("<html></html>")

    @app.post("/articles/{article_id}")
    async def save_article(article_id: int):
        return HTMLResponse("saved")

    @app.get("/api/articles")
    async def list_articles():
        return JSONResponse([])

    @app.get("/admin/articles")
    async def admin_articles():
        return HTMLResponse("<html>admin</html>")

    @app.get("/missing")
    async def missing():
        return HTMLResponse("not found", status_code=404)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def client_for(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


@pytest.fixture
def recorder():
    return ContextRecorder()


@pytest.fixture
def recorder_app(recorder, test_settings):
    registry = PluginRegistry()
    registry.register(recorder)
    return build_app(registry, test_settings)


class TestAfterDispatchMiddleware:
    async def test_context_from_page_options(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            response = await client.get("/articles/5?utm_source=mail&lang=en#top")

        assert response.status_code == 200
        context = recorder.contexts[0]
        assert context.extension == "content"
        assert context.view == "article"
        assert context.menu_item_id == 101
        assert context.route_params["id"] == 5
        assert "Itemid" not in context.route_params
        assert context.clean_uri == "/articles/5?lang=en"
        assert context.url == "http://testserver/articles/5?lang=en"
        assert context.method == "GET"
        assert context.document_type == "html"
        assert context.is_admin is False
        assert context.site_root == "http://testserver/"

    async def test_context_from_query_string(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            await client.get("/page?option=com_eshop&view=product&id=3")

        context = recorder.contexts[0]
        assert context.extension == "eshop"
        assert context.view == "product"
        assert context.route_params == {"id": "3"}
        assert context.menu_item_id is None

    async def test_json_document_type(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            await client.get("/api/articles")

        assert recorder.contexts[0].document_type == "json"

    async def test_admin_path(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            await client.get("/admin/articles")

        assert recorder.contexts[0].is_admin is True

    async def test_post_method_recorded(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            await client.post("/articles/5")

        assert recorder.contexts[0].method == "POST"

    async def test_error_response_not_dispatched(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            response = await client.get("/missing")

        assert response.status_code == 404
        assert recorder.contexts == []

    async def test_excluded_path_not_dispatched(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            await client.get("/health")

        assert recorder.contexts == []

    async def test_request_id_propagated(self, recorder, recorder_app):
        async with client_for(recorder_app) as client:
            await client.get("/page", headers={"X-Request-ID": "req-123"})

        assert recorder.request_ids == ["req-123"]

    async def test_failing_plugin_does_not_break_page(self, test_settings):
        registry = PluginRegistry()
        registry.register(ContextRecorder(fail=True))
        app = build_app(registry, test_settings)

        async with client_for(app) as client:
            response = await client.get("/articles/5")

        assert response.status_code == 200
        assert "Article 5" in response.text


class TestMetaTagsEndToEnd:
    async def test_page_view_stores_tags(self, test_db, test_settings, reader_registry, mock_cache, test_article, article_url):
        service = MetaTagsService(MetaTagsConfig(), test_settings, reader_registry, mock_cache)
        registry = PluginRegistry()
        registry.register(MetaTagsPlugin(service=service))
        app = build_app(registry, test_settings, session_factory=TestSessionLocal)

        async with client_for(app) as client:
            response = await client.get(article_url.uri)

        assert response.status_code == 200
        tags = await TagStore(test_db).load_tags(article_url.id)
        assert tags.get("ogtitle").content == "Hello World"
        assert tags.get("seo_canonical").content == f"http://testserver{article_url.uri}"
        mock_cache.invalidate_uri.assert_awaited_once_with(article_url.uri)


class TestRequestContextHelpers:
    @pytest.mark.parametrize(
        "option,expected",
        [("com_content", "content"), ("COM_K2", "k2"), ("eshop", "eshop"), ("com_x-y", "xy"), (None, ""), ("", "")],
    )
    def test_normalize_extension(self, option, expected):
        assert normalize_extension(option) == expected

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("text/html; charset=utf-8", "html"),
            ("application/xhtml+xml", "html"),
            ("application/json", "json"),
            ("application/rss+xml", "xml"),
            ("", ""),
        ],
    )
    def test_document_type(self, content_type, expected):
        assert document_type(content_type) == expected

    def test_reader_options(self):
        context = RequestContext(
            url="http://testserver/a",
            clean_uri="/a",
            method="GET",
            document_type="html",
            is_admin=False,
            extension="content",
            view="article",
            menu_item_id=4,
            route_params={"id": "9"},
        )

        options = context.reader_options(generate_metadesc=True, extract_image=False)

        assert options == {
            "id": "9",
            "view": "article",
            "task": "",
            "menu_item_id": 4,
            "generate_metadesc": True,
            "extract_image": False,
        }

    def test_context_is_immutable(self):
        context = RequestContext(
            url="u", clean_uri="/", method="GET", document_type="html", is_admin=False, extension="content"
        )

        with pytest.raises(AttributeError):
            context.view = "category"


class TestStructuredLogging:
    def test_json_record(self):
        token = request_id_var.set("req-9")
        try:
            record = logging.LogRecord("metatags.test", logging.INFO, __file__, 1, "Stored %d tags", (3,), None)
            record.url_id = 12
            RequestIdFilter().filter(record)

            data = json.loads(StructuredFormatter().format(record))
        finally:
            request_id_var.reset(token)

        assert data["message"] == "Stored 3 tags"
        assert data["level"] == "INFO"
        assert data["request_id"] == "req-9"
        assert data["url_id"] == 12
        assert "inserted" not in data
