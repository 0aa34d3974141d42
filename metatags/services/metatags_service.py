"""
Meta Tags Service

Runs one meta tag pass for a dispatched page: restriction checks, page data
lookup, tag generation, reconciliation against stored tags, persistence,
page cache invalidation and check date bookkeeping.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from metatags.config import Settings, settings as default_settings
from metatags.context import RequestContext
from metatags.extensions.registry import ExtensionRegistry, extension_registry
from metatags.schemas.config import MetaTagsConfig
from metatags.services.reconciler import TagReconciler
from metatags.services.restrictions import Restriction, RestrictionChecker
from metatags.services.tag_generator import TagGenerator
from metatags.services.tag_store import TagStore
from metatags.utils.cache import CacheManager, cache_manager
from metatags.utils.metrics import METATAGS_PASS_DURATION_SECONDS, record_pass, record_skip, record_tag_writes

logger = logging.getLogger(__name__)


@dataclass
class PassResult:
    """Outcome of one pass."""

    url_id: int | None = None
    inserted: int = 0
    updated: int = 0
    restriction: Restriction | None = None

    @property
    def processed(self) -> bool:
        return self.restriction is None


class MetaTagsService:
    def __init__(
        self,
        config: MetaTagsConfig,
        settings: Settings | None = None,
        registry: ExtensionRegistry | None = None,
        cache: CacheManager | None = None,
    ):
        self.config = config
        self.settings = settings or default_settings
        self.registry = registry or extension_registry
        self.cache = cache or cache_manager
        self.checker = RestrictionChecker(config, self.settings)
        self.generator = TagGenerator()
        self.reconciler = TagReconciler()

    async def process(self, context: RequestContext, db: AsyncSession, now: datetime | None = None) -> PassResult:
        """
        Run a pass for the page described by ``context``.

        Raises:
            TagStoreError: If storing tags fails; nothing of the pass is kept
            CheckDateFormatError: If the URL's check date is unreadable
            ContentReaderError: If the content reader fails
        """
        start_time = time.perf_counter()
        try:
            result = await self._process(context, db, now)
        except Exception:
            record_pass("failed")
            raise
        finally:
            METATAGS_PASS_DURATION_SECONDS.observe(time.perf_counter() - start_time)

        if result.restriction is not None:
            record_skip(result.restriction.value)
            logger.debug(
                "Skipped %s: %s",
                context.clean_uri,
                result.restriction.value,
                extra={"path": context.clean_uri, "restriction": result.restriction.value},
            )
        else:
            record_pass("processed")
            record_tag_writes(result.inserted, result.updated)
            logger.info(
                f"Meta tag pass for {context.clean_uri}: {result.inserted} inserted, {result.updated} updated",
                extra={
                    "path": context.clean_uri,
                    "url_id": result.url_id,
                    "inserted": result.inserted,
                    "updated": result.updated,
                },
            )
        return result

    async def _process(self, context: RequestContext, db: AsyncSession, now: datetime | None) -> PassResult:
        restriction = self.checker.check_request(context)
        if restriction is not None:
            return PassResult(restriction=restriction)

        store = TagStore(db)
        url = await store.get_url(context.clean_uri)
        restriction = self.checker.check_url(url, now)
        if restriction is not None:
            return PassResult(url_id=url.id if url is not None else None, restriction=restriction)

        url_id = url.id
        options = context.reader_options(self.config.generate_metadesc, self.config.extract_image)
        data = await self.registry.get_data(context.extension, options, db)

        candidates = self.generator.generate(data, context.url, self.config, context.site_root)

        result = PassResult(url_id=url_id)
        if candidates:
            existing = await store.load_tags(url_id)
            delta = self.reconciler.reconcile(existing, candidates)
            await store.store(delta)
            result.inserted = len(delta.to_insert)
            result.updated = len(delta.to_update)

            await self.cache.invalidate_uri(context.clean_uri)

        await store.touch_check_date(url_id, now)
        return result
