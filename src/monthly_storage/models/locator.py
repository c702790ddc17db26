from enum import StrEnum
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict


def is_empty(value: Any) -> bool:
    """None, "" and other falsy values count as empty; numeric zero does not."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return False
    return not value


class ScopeKind(StrEnum):
    MARKETPLACE = "marketplace"
    LIST = "list"


class ScopedEndpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ok"] = "ok"
    endpoint: str


class MissingScope(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["missing"] = "missing"
    scope: ScopeKind
    message: str


EndpointResolution = ScopedEndpoint | MissingScope


class Locator(BaseModel):
    """Everything needed to derive one storage URL.

    Instances are frozen; the ``with_*`` methods return updated copies so a
    locator can be shared or kept as a snapshot without surprises.
    """

    model_config = ConfigDict(frozen=True)

    storage_url: str = ""
    endpoint: str | None = None
    id: int | str | None = None
    locale: str = "en"
    extension: Literal["json"] = "json"
    website_id: int | None = None
    marketplace_id: int | str | None = None
    list_id: int | None = None

    def _replace(self, **changes: Any) -> Self:
        # validated, unlike model_copy, so the declared field types hold
        return self.model_validate({**self.model_dump(), **changes})

    def with_endpoint(self, endpoint: str) -> Self:
        # a new endpoint never inherits the id of the previous one
        return self._replace(id=None, endpoint=endpoint)

    def with_id(self, id: int | str | None) -> Self:
        return self._replace(id=id)

    def with_locale(self, locale: str) -> Self:
        return self._replace(locale=locale)

    def with_website(self, website_id: int | None) -> Self:
        return self._replace(website_id=website_id)

    def with_marketplace(self, marketplace_id: int | str | None) -> Self:
        return self._replace(marketplace_id=marketplace_id)

    def with_list(self, list_id: int | None) -> Self:
        return self._replace(list_id=list_id)

    def with_storage_url(self, storage_url: str) -> Self:
        return self._replace(storage_url=storage_url)

    def flushed(self) -> Self:
        return self._replace(id=None, endpoint=None)

    def has_root_path_endpoint(self) -> bool:
        return bool(self.endpoint) and self.endpoint.startswith("/")

    def get_storage_url(self) -> str:
        if is_empty(self.storage_url):
            return ""
        return self.storage_url.rstrip("/")

    def listing_endpoint(self) -> EndpointResolution:
        if is_empty(self.list_id):
            return MissingScope(scope=ScopeKind.LIST, message="Please set list id.")
        return ScopedEndpoint(endpoint=f"lists/{self.list_id}/listings")

    def location_endpoint(self) -> EndpointResolution:
        if is_empty(self.list_id):
            return MissingScope(scope=ScopeKind.LIST, message="Please set list id.")
        return ScopedEndpoint(endpoint=f"lists/{self.list_id}/locations")

    def profile_endpoint(self) -> EndpointResolution:
        if is_empty(self.marketplace_id):
            return MissingScope(
                scope=ScopeKind.MARKETPLACE, message="Missing marketplace id."
            )
        # leading slash: profiles live outside the website scope
        return ScopedEndpoint(endpoint=f"/marketplaces/{self.marketplace_id}/profiles")

    def build_url(self) -> str:
        url = ""
        root_path = self.has_root_path_endpoint()

        if not root_path and self.website_id:
            url += f"/websites/{self.website_id}"

        if self.endpoint:
            url += ("" if root_path else "/") + self.endpoint

        if self.id:
            url += f"/{self.id}"
        else:
            url += f"/{self.locale}"

        url += f".{self.extension}"

        # Existing consumers depend on only the first "//" being collapsed.
        url = url.replace("//", "/", 1)

        return self.get_storage_url() + url
