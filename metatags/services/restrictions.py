"""
Restriction Checker

Decides whether a dispatched page gets a meta tag pass. Request-level rules
need no I/O; URL-level rules need the page's URL record.
"""

import enum
import logging
from datetime import datetime
from typing import Any

from metatags.config import Settings, settings as default_settings
from metatags.constants import SUPPORTED_EXTENSIONS
from metatags.context import RequestContext
from metatags.exceptions import CheckDateFormatError
from metatags.models.url import TrackedUrl
from metatags.schemas.config import MetaTagsConfig

logger = logging.getLogger(__name__)


class Restriction(str, enum.Enum):
    ADMIN = "admin"
    DOCUMENT_TYPE = "document_type"
    METHOD = "method"
    COMPONENT_DISABLED = "component_disabled"
    UNSUPPORTED_EXTENSION = "unsupported_extension"
    EXTENSION_DISABLED = "extension_disabled"
    URL_MISSING = "url_missing"
    AUTOUPDATE_OFF = "autoupdate_off"
    UNPUBLISHED = "unpublished"
    RECENTLY_CHECKED = "recently_checked"


def parse_check_date(value: Any) -> datetime | None:
    """Return the check date as datetime; None means never checked."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            raise CheckDateFormatError(value) from None
    raise CheckDateFormatError(value)


def days_between(start: datetime, end: datetime) -> int:
    """Whole days between two moments, in either direction."""
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)
    return abs(end - start).days


class RestrictionChecker:
    def __init__(self, config: MetaTagsConfig, settings: Settings | None = None):
        self.config = config
        self.settings = settings or default_settings

    def check_request(self, context: RequestContext) -> Restriction | None:
        """Restriction that applies to the request itself, if any."""
        if context.is_admin:
            return Restriction.ADMIN

        if context.document_type != "html":
            return Restriction.DOCUMENT_TYPE

        # Only safe reads are processed
        if context.method != "GET":
            return Restriction.METHOD

        if not self.settings.metatags_enabled:
            return Restriction.COMPONENT_DISABLED

        if context.extension not in SUPPORTED_EXTENSIONS:
            return Restriction.UNSUPPORTED_EXTENSION

        if not self.config.extensions.is_enabled(context.extension):
            return Restriction.EXTENSION_DISABLED

        return None

    def check_url(self, url: TrackedUrl | None, now: datetime | None = None) -> Restriction | None:
        """Restriction that applies to the page's URL record, if any."""
        if url is None or not url.id:
            return Restriction.URL_MISSING

        if not url.autoupdate:
            return Restriction.AUTOUPDATE_OFF

        if not url.published:
            return Restriction.UNPUBLISHED

        period = self.config.autoupdate_period
        if period > 0:
            checked = parse_check_date(url.checked_at)
            if checked is not None:
                elapsed = days_between(checked, now or datetime.utcnow())
                if period > elapsed:
                    return Restriction.RECENTLY_CHECKED

        return None

    def should_process(
        self,
        context: RequestContext,
        url: TrackedUrl | None,
        now: datetime | None = None,
    ) -> bool:
        restriction = self.check_request(context) or self.check_url(url, now)
        if restriction is not None:
            logger.debug("Meta tag pass restricted for %s: %s", context.clean_uri, restriction.value)
            return False
        return True
