"""
Request Context

Immutable description of a dispatched page request. It is built once, after
the host has produced the response, and handed to every step of a pass.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from metatags.config import Settings
from metatags.utils.url import get_clean_uri, get_page_url

_EXTENSION_CHARS = re.compile(r"[^a-z0-9_]")

# Options that describe the page rather than route parameters
_PAGE_KEYS = ("option", "view", "task", "Itemid")


def normalize_extension(option: str | None) -> str:
    """Turn a request option such as ``com_content`` into ``content``."""
    if not option:
        return ""
    name = option.strip().lower()
    if name.startswith("com_"):
        name = name[len("com_") :]
    return _EXTENSION_CHARS.sub("", name)


def document_type(content_type: str) -> str:
    """Short document type of a response content type (html, json, xml ...)."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type in ("text/html", "application/xhtml+xml"):
        return "html"
    if not media_type:
        return ""
    subtype = media_type.rsplit("/", 1)[-1]
    return subtype.rsplit("+", 1)[-1]


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def set_page_options(request: Request, option: str, view: str = "", task: str = "", **params: Any) -> None:
    """
    Let a host route describe the page it renders.

    Example:
        set_page_options(request, "content", view="article", id=article.id)
    """
    request.state.page_options = {"option": option, "view": view, "task": task, **params}


@dataclass(frozen=True)
class RequestContext:
    url: str
    clean_uri: str
    method: str
    document_type: str
    is_admin: bool
    extension: str
    view: str = ""
    task: str = ""
    menu_item_id: int | None = None
    route_params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    site_root: str = ""

    def reader_options(self, generate_metadesc: bool, extract_image: bool) -> dict[str, Any]:
        """Options passed to content readers: route parameters plus page flags."""
        return {
            **self.route_params,
            "view": self.view,
            "task": self.task,
            "menu_item_id": self.menu_item_id,
            "generate_metadesc": generate_metadesc,
            "extract_image": extract_image,
        }

    @classmethod
    def from_request(cls, request: Request, response: Response, settings: Settings) -> "RequestContext":
        page_options = getattr(request.state, "page_options", None)
        if page_options is None:
            page_options = dict(request.query_params)
            page_options.update(request.path_params)

        route_params = {key: value for key, value in page_options.items() if key not in _PAGE_KEYS}
        path = request.url.path
        admin_prefix = settings.admin_path_prefix.rstrip("/")

        return cls(
            url=get_page_url(request.url),
            clean_uri=get_clean_uri(request.url),
            method=request.method.upper(),
            document_type=document_type(response.headers.get("content-type", "")),
            is_admin=bool(admin_prefix) and (path == admin_prefix or path.startswith(admin_prefix + "/")),
            extension=normalize_extension(page_options.get("option")),
            view=str(page_options.get("view") or ""),
            task=str(page_options.get("task") or ""),
            menu_item_id=_to_int(page_options.get("Itemid")),
            route_params=MappingProxyType(route_params),
            site_root=settings.site_root,
        )
