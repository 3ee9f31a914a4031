"""Video item models - drafts and published videos share one shape."""

from datetime import date
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

DEFAULT_STORE_NAMES = ("CASAS BAHIA", "MERCADO LIVRE", "AMAZON")


class CompletionSource(str, Enum):
    """Who decides whether a checklist item is completed."""

    DERIVED = "derived"
    MANUAL = "manual"


class StoreLink(BaseModel):
    """Affiliate link for one product at one store."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: f"store-{uuid4().hex[:12]}")
    name: str = ""
    is_not_bivolt: bool = Field(
        default=False,
        alias="isNotBivolt",
        description="Product ships in separate 110V/220V variants",
    )
    url: str = ""
    url_110v: str = Field(default="", alias="url110v")
    url_220v: str = Field(default="", alias="url220v")

    @property
    def has_links(self) -> bool:
        """Check that the links this store needs are filled in."""
        if self.is_not_bivolt:
            return bool(self.url_110v.strip()) and bool(self.url_220v.strip())
        return bool(self.url.strip())


class Product(BaseModel):
    """A product featured in a video."""

    id: str = Field(default_factory=lambda: f"prod-{uuid4().hex[:12]}")
    name: str = ""
    stores: list[StoreLink] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "Product":
        """Create an unnamed product with the default store slots."""
        return cls(stores=[StoreLink(name=name) for name in DEFAULT_STORE_NAMES])


class ChecklistItem(BaseModel):
    """Per-video instance of a task template with its completion flag."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    completed: bool = False

    @property
    def source(self) -> CompletionSource:
        from vdash.services.derivation import is_derived

        return CompletionSource.DERIVED if is_derived(self.key) else CompletionSource.MANUAL


class PostPublicationItem(BaseModel):
    """Follow-up task done after a video goes live."""

    key: str
    label: str
    completed: bool = False


def default_post_publication_checklist() -> list[PostPublicationItem]:
    return [
        PostPublicationItem(key="likePoints", label="Add video to the engagement list"),
        PostPublicationItem(key="fixedComment", label="Pin comment with product links"),
    ]


class Video(BaseModel):
    """A video production item.

    The same model is used for drafts and for published videos; which
    collection an item belongs to is tracked by the repository, not here.
    ``post_date`` is ``None`` when unset and travels as ``""`` in JSON.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str = ""
    description: str = ""
    tags: str = ""
    script: str = ""
    thumbnail: str = Field(default="", description="URL or base64 data URI")
    chapters: str = ""
    post_date: date | None = Field(default=None, alias="postDate")
    video_number: int | None = Field(default=None, alias="videoNumber")
    products: list[Product] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(default_factory=list)
    post_publication_checklist: list[PostPublicationItem] | None = Field(
        default=None, alias="postPublicationChecklist"
    )

    @field_validator("post_date", mode="before")
    @classmethod
    def empty_date_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_serializer("post_date")
    def serialize_post_date(self, value: date | None) -> str:
        return value.isoformat() if value else ""

    @property
    def is_fully_checked(self) -> bool:
        """Check that the checklist is non-empty and every item is completed."""
        return bool(self.checklist) and all(item.completed for item in self.checklist)

    def get_checklist_item(self, key: str) -> ChecklistItem | None:
        """Get a checklist item by task key."""
        for item in self.checklist:
            if item.key == key:
                return item
        return None
