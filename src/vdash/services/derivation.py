"""Derivation rules: checklist tasks computed from other video fields.

Keys listed in ``DERIVATION_RULES`` are never operator-controlled; their
completion flag is always recomputed from the video. Every other key keeps
whatever the operator set.
"""

from collections.abc import Callable

from vdash.models.video import Video

Predicate = Callable[[Video], bool]


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def _title_set(video: Video) -> bool:
    return _filled(video.title)


def _products_named(video: Video) -> bool:
    return bool(video.products) and all(_filled(p.name) for p in video.products)


def _affiliate_links_set(video: Video) -> bool:
    if not video.products:
        return False
    return all(
        _filled(product.name)
        and bool(product.stores)
        and all(store.has_links for store in product.stores)
        for product in video.products
    )


DERIVATION_RULES: dict[str, Predicate] = {
    "title": _title_set,
    "productType": _title_set,  # legacy key, same rule as title
    "selectProducts": _products_named,
    "affiliateLinks": _affiliate_links_set,
    "generateDescription": lambda v: _filled(v.description),
    "tags": lambda v: _filled(v.tags),
    "thumbnail": lambda v: _filled(v.thumbnail),
    "generateScript": lambda v: _filled(v.script),
    "chapters": lambda v: _filled(v.chapters),
}

DERIVED_KEYS = frozenset(DERIVATION_RULES)


def is_derived(key: str) -> bool:
    """Check whether a task key is computed rather than toggled."""
    return key in DERIVATION_RULES


def derive_completion(video: Video) -> dict[str, bool]:
    """Evaluate the rules for the derived keys present in the checklist."""
    return {
        item.key: DERIVATION_RULES[item.key](video)
        for item in video.checklist
        if item.key in DERIVATION_RULES
    }


def apply_derivation(video: Video) -> Video:
    """Write derived completion flags into the video's checklist.

    Returns the same object when nothing changed, so callers can use an
    identity check to skip change notifications.
    """
    derived = derive_completion(video)
    checklist = [
        item.model_copy(update={"completed": derived[item.key]})
        if item.key in derived and item.completed != derived[item.key]
        else item
        for item in video.checklist
    ]
    if checklist == video.checklist:
        return video
    return video.model_copy(update={"checklist": checklist})
