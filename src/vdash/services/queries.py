"""Read-side helpers over video lists: ordering, search, scheduling."""

import re
from collections.abc import Iterable
from datetime import date, timedelta
from urllib.parse import quote

from vdash.models.video import Video

_COUNT_PREFIX_RE = re.compile(r"^\d+\s*")


def sort_drafts(drafts: Iterable[Video]) -> list[Video]:
    """Order drafts for the board.

    Dated drafts come first, earliest date first. Undated drafts follow,
    ordered by id descending.
    """
    drafts = list(drafts)
    dated = sorted((d for d in drafts if d.post_date), key=lambda d: d.post_date)
    undated = sorted((d for d in drafts if not d.post_date), key=lambda d: d.id, reverse=True)
    return dated + undated


def search_by_title(videos: Iterable[Video], query: str) -> list[Video]:
    """Case-insensitive substring match on titles. Empty query matches all."""
    if not query:
        return list(videos)
    needle = query.lower()
    return [v for v in videos if needle in v.title.lower()]


def overdue_drafts(drafts: Iterable[Video], today: date | None = None) -> list[Video]:
    """Drafts whose post date is already in the past."""
    today = today or date.today()
    return [d for d in drafts if d.post_date and d.post_date < today]


def default_post_date(drafts: Iterable[Video], today: date | None = None) -> date:
    """Suggested post date for a new draft.

    The day after the latest scheduled draft, or tomorrow when no draft
    has a date.
    """
    dates = [d.post_date for d in drafts if d.post_date]
    if dates:
        return max(dates) + timedelta(days=1)
    return (today or date.today()) + timedelta(days=1)


def next_video_number(drafts: Iterable[Video]) -> int:
    """One more than the highest video number among drafts, starting at 1."""
    return max((d.video_number or 0 for d in drafts), default=0) + 1


def sync_title_with_product_count(title: str, product_count: int) -> str:
    """Rewrite the leading product count of a title (e.g. ``"5 best fans"``).

    Any existing numeric prefix is removed; a new one is added when there
    is at least one product.
    """
    bare = _COUNT_PREFIX_RE.sub("", title)
    if product_count > 0:
        return f"{product_count} {bare}"
    return bare


def store_search_url(store: str, product_name: str) -> str | None:
    """Search page URL for a product on one of the default stores.

    Returns None for unknown stores or blank product names.
    """
    name = product_name.strip()
    if not name:
        return None

    key = store.strip().lower()
    if key in ("mercado livre", "mercadolivre"):
        slug = re.sub(r"\s+", "-", name.lower())
        return f"https://lista.mercadolivre.com.br/{slug}#D[A:{quote(name, safe='')}]"
    if key == "amazon":
        query = quote(name, safe="").replace("%20", "+")
        return f"https://www.amazon.com.br/s?k={query}"
    if key in ("casas bahia", "casasbahia"):
        slug = re.sub(r"\s+", "-", name.lower())
        return f"https://www.casasbahia.com.br/{slug}/b?filter=lojistas-l10037"
    return None
