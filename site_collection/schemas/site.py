"""Site Schemas — camelCase app-state dicts <-> core SiteRecord / frame views.

Invariants:
    - Numeric fields are coerced to int ("3" -> 3) the way app state stores them
    - tags: None or a single tag string are accepted and become a list
    - folder_id, parent_folder_id, partition_number and count are never negative
    - Validation failures surface as InvalidSiteDetailError naming the field

Design Decisions:
    - alias_generator=to_camel + populate_by_name: accepts both app-state keys
      and Python field names
    - extra="ignore": app state carries UI-only keys the core does not need
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from site_collection.core.domain_types import SiteTag
from site_collection.core.errors import ErrorContext, InvalidSiteDetailError
from site_collection.core.site_record import SiteList, SiteRecord


_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SiteDetail(BaseModel):
    """One site record as stored in application state."""
    model_config = _CAMEL

    location: str | None = None
    title: str | None = None
    custom_title: str | None = None
    tags: list[SiteTag] = Field(default_factory=list)
    last_accessed_time: int | None = None
    count: int | None = Field(None, ge=0)
    folder_id: int | None = Field(None, ge=0)
    parent_folder_id: int | None = Field(None, ge=0)
    partition_number: int | None = Field(None, ge=0)
    favicon: str | None = None
    theme_color: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v: object) -> object:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    def to_record(self) -> SiteRecord:
        return SiteRecord(**self.model_dump())

    @classmethod
    def from_record(cls, record: SiteRecord) -> "SiteDetail":
        return cls(
            location=record.location,
            title=record.title,
            custom_title=record.custom_title,
            tags=list(record.tags),
            last_accessed_time=record.last_accessed_time,
            count=record.count,
            folder_id=record.folder_id,
            parent_folder_id=record.parent_folder_id,
            partition_number=record.partition_number,
            favicon=record.favicon,
            theme_color=record.theme_color,
        )

    def to_app_state(self) -> dict:
        """camelCase dict without absent fields; tags as plain strings."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FrameSnapshot(BaseModel):
    """Read-only tab state. Satisfies core.boundary_protocols.FrameLike."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True,
    )

    location: str | None = None
    pinned_location: str | None = None
    title: str | None = None
    partition_number: int | None = Field(None, ge=0)
    icon: str | None = None
    theme_color: str | None = None
    computed_theme_color: str | None = None


def _invalid(e: ValidationError, index: int | None = None) -> InvalidSiteDetailError:
    first = e.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "<root>"
    return InvalidSiteDetailError(
        f"Invalid site detail ({field}): {first['msg']}",
        field,
        ErrorContext(debug_info={"index": index} if index is not None else None),
    )


def parse_site_detail(raw: dict) -> SiteRecord:
    """Validate one app-state dict into a SiteRecord."""
    try:
        return SiteDetail.model_validate(raw).to_record()
    except ValidationError as e:
        raise _invalid(e) from e


def parse_site_list(raw: Iterable[dict]) -> SiteList:
    """Validate an app-state site list, preserving order."""
    records = []
    for index, item in enumerate(raw):
        try:
            records.append(SiteDetail.model_validate(item).to_record())
        except ValidationError as e:
            raise _invalid(e, index) from e
    return tuple(records)


def dump_site_list(sites: Iterable[SiteRecord]) -> list[dict]:
    return [SiteDetail.from_record(site).to_app_state() for site in sites]
