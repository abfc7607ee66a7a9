"""Google Analytics (gtag) reporting behind an "is enabled" gate."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

import structlog

from .settings import ga_id_from_env

logger = structlog.get_logger(__name__)

GtagHook = Callable[..., Any]


class Tracker(Protocol):
    """Capability for reporting analytics events."""

    def record(self, event_kind: str, *payload: Any) -> None: ...


class NoopTracker:
    """Tracker used when analytics is not configured or no hook is present."""

    def record(self, event_kind: str, *payload: Any) -> None:
        return None


class GtagTracker:
    """Forwards events to a gtag-compatible callable."""

    def __init__(self, hook: GtagHook) -> None:
        self.hook = hook

    def record(self, event_kind: str, *payload: Any) -> None:
        self.hook(event_kind, *payload)


class DataLayer:
    """Buffer with the gtag call signature, mirroring the browser ``dataLayer``."""

    def __init__(self) -> None:
        self.entries: List[Tuple[Any, ...]] = []

    def __call__(self, *args: Any) -> None:
        self.entries.append(args)

    def __len__(self) -> int:
        return len(self.entries)


def is_ga_enabled(ga_id: Optional[str], hook: Optional[GtagHook]) -> bool:
    """True only when an id is configured and a callable hook is available."""
    return bool(ga_id) and callable(hook)


class Analytics:
    """Gate in front of the tracking hook.

    Reporting calls never raise: a disabled gate makes them no-ops and a
    failing hook is logged and ignored.
    """

    def __init__(self, ga_id: Optional[str], hook: Optional[GtagHook] = None) -> None:
        self.ga_id = ga_id or ""
        self.enabled = is_ga_enabled(self.ga_id, hook)
        self.tracker: Tracker = GtagTracker(hook) if self.enabled else NoopTracker()

    @property
    def is_ga_enabled(self) -> bool:
        return self.enabled

    def _record(self, event_kind: str, *payload: Any) -> None:
        try:
            self.tracker.record(event_kind, *payload)
        except Exception as exc:  # noqa: BLE001
            logger.warning("analytics_hook_failed", event_kind=event_kind, error=str(exc))

    def pageview(self, url: str) -> None:
        if not self.enabled:
            return
        self._record("config", self.ga_id, {"page_path": url})

    def ga_event(self, action: str, params: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            return
        self._record("event", action, dict(params or {}))


def build_page_url(pathname: str, query: Optional[str] = None) -> str:
    """Combine a path and an optional query string into the tracked page URL."""
    query = (query or "").lstrip("?")
    if query:
        return f"{pathname}?{query}"
    return pathname


def get_analytics(hook: Optional[GtagHook] = None) -> Analytics:
    """Build an analytics gate using the configured GA id.

    Only ``PUBLIC_GA_ID`` is read, so secret lookups cannot make this raise.
    """
    return Analytics(ga_id_from_env(), hook)
