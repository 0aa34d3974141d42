"""
Tag Reconciler

Compares the tags stored for a URL with the candidates generated for the
same URL during the current pass and works out which rows must be inserted
and which must be replaced. Unchanged rows are left alone.
"""

import hashlib
import logging
from collections.abc import Mapping
from typing import Any

from metatags.schemas.tag import Tag, TagDelta, TagSet

logger = logging.getLogger(__name__)

# Candidate keys copied onto a new tag
_CANDIDATE_FIELDS = ("title", "type", "tag", "content", "output")


def _text(candidate: Mapping[str, Any], key: str) -> str:
    value = candidate.get(key)
    return "" if value is None else str(value)


def _digest(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()  # nosec S324


def has_changed(current: Tag, candidate: Mapping[str, Any]) -> bool:
    """
    Tell whether a stored tag differs from its freshly generated candidate.

    Args:
        current: Tag loaded from storage
        candidate: Generated values for the same tag name

    Returns:
        True when the stored row has to be replaced
    """
    if _digest(current.tag) != _digest(_text(candidate, "tag")):
        return True

    old_content = current.content.strip()
    new_content = _text(candidate, "content").strip()

    # An empty stored value is always filled in.
    if old_content == "" and new_content != "":
        return True

    if old_content != "" and new_content != "":
        return _digest(old_content) != _digest(new_content)

    return False


class TagReconciler:
    """Splits generated candidates into new tags and changed tags."""

    def reconcile(self, existing: TagSet, candidates: Mapping[str, Any]) -> TagDelta:
        """
        Compute the inserts and updates for one URL.

        Args:
            existing: Tags currently stored for the URL
            candidates: Generated tag values keyed by tag name

        Returns:
            TagDelta whose inserts carry no id/ordering and whose updates keep theirs
        """
        delta = TagDelta()

        for name, candidate in candidates.items():
            if not candidate or not isinstance(candidate, Mapping):
                logger.debug("Skipping empty or malformed candidate %r", name)
                continue

            current = existing.get(name)
            if current is None:
                values = {key: _text(candidate, key) for key in _CANDIDATE_FIELDS if key in candidate}
                values.update(name=name, content=_text(candidate, "content"), url_id=existing.url_id)
                delta.to_insert.append(Tag(**values))
                continue

            if has_changed(current, candidate):
                delta.to_update.append(
                    current.model_copy(
                        update={
                            "tag": _text(candidate, "tag"),
                            "content": _text(candidate, "content"),
                            "output": _text(candidate, "output"),
                        }
                    )
                )

        logger.debug(
            "Reconciled URL %s: %d new, %d changed",
            existing.url_id,
            len(delta.to_insert),
            len(delta.to_update),
        )
        return delta
