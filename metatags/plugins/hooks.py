"""
Plugin Hook Constants

Hook names follow the `category.action` convention.
"""

from __future__ import annotations

# ── Page lifecycle ─────────────────────────────────────────────────────────────
# Fired once a page response has been produced.
# Payload: {"context": RequestContext, "db": AsyncSession}
HOOK_AFTER_DISPATCH = "page.after_dispatch"

ALL_HOOKS: list[str] = [HOOK_AFTER_DISPATCH]
