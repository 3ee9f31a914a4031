"""Shared fixtures for vdash tests."""

from collections.abc import Callable

import pytest

from vdash.models.template import DEFAULT_TEMPLATE
from vdash.models.video import Product, StoreLink, Video
from vdash.services.reconciler import new_checklist


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for a named product with one linked store."""

    def _make(name: str = "Tower fan", url: str = "https://amzn.example/fan") -> Product:
        return Product(name=name, stores=[StoreLink(name="AMAZON", url=url)])

    return _make


@pytest.fixture
def ready_video(make_product: Callable[..., Product]) -> Video:
    """A draft whose derived fields are all filled in; manual tasks still open.

    Manual tasks of the default template: productImages, cutting, editing, render.
    """
    return Video(
        title="2 best tower fans",
        description="Our picks",
        tags="fan, summer",
        script="Intro. Product one.",
        thumbnail="https://img.example/thumb.png",
        chapters="00:00 Intro",
        products=[make_product("Fan A"), make_product("Fan B")],
        checklist=new_checklist(DEFAULT_TEMPLATE),
    )
