import logging
from collections.abc import Coroutine
from typing import Any, Self

import httpx

from monthly_storage.config import StorageSettings
from monthly_storage.errors import ConfigurationError, ResourceNotFoundError
from monthly_storage.models.locator import (
    EndpointResolution,
    Locator,
    MissingScope,
    is_empty,
)

logger = logging.getLogger(__name__)

JsonResult = Coroutine[Any, Any, Any]


class StorageBuilder:
    """Fluent URL builder and JSON fetcher for Monthly Cloud Storage.

    Setters return the builder so calls can be chained::

        data = await storage().set_website(1).set_endpoint("contents").find(2)

    The configuration lives in an immutable :class:`Locator`; each setter
    swaps in an updated copy. A builder belongs to one caller at a time:
    configure it fully before requesting, or use a fresh builder per request.

    ``get``/``find`` and the finders build the URL when they are called and
    return a coroutine that performs the request, so a finder missing its
    scope id raises :class:`ConfigurationError` immediately.
    """

    def __init__(
        self,
        storage_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        settings: StorageSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else StorageSettings()
        self._client = client
        self._locator = Locator(storage_url=storage_url or self.settings.url)

    @property
    def locator(self) -> Locator:
        return self._locator

    def set_endpoint(self, endpoint: str) -> Self:
        """Set the resource collection, e.g. "menus" or "contents/".

        The previous endpoint and id are dropped. An endpoint starting with
        "/" (for example "/marketplaces") is addressed from the storage root,
        without the website prefix.
        """
        self._locator = self._locator.with_endpoint(endpoint)
        return self

    def set_id(self, id: int | str | None) -> Self:
        self._locator = self._locator.with_id(id)
        return self

    def set_locale(self, locale: str) -> Self:
        self._locator = self._locator.with_locale(locale)
        return self

    def set_website(self, website_id: int | None) -> Self:
        self._locator = self._locator.with_website(website_id)
        return self

    def set_marketplace(self, marketplace_id: int | str | None) -> Self:
        self._locator = self._locator.with_marketplace(marketplace_id)
        return self

    def set_list(self, list_id: int | None) -> Self:
        self._locator = self._locator.with_list(list_id)
        return self

    def set_storage_url(self, storage_url: str) -> Self:
        self._locator = self._locator.with_storage_url(storage_url)
        return self

    def flush(self) -> None:
        """Unset the per-request parameters (endpoint and id)."""
        self._locator = self._locator.flushed()

    def has_root_path_endpoint(self) -> bool:
        return self._locator.has_root_path_endpoint()

    def get_storage_url(self) -> str:
        return self._locator.get_storage_url()

    def build_url(self) -> str:
        url = self._locator.build_url()
        logger.debug("Built storage url %s", url)
        return url

    def get_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def get(self) -> JsonResult:
        return self.http_get_request(self.build_url())

    def find(self, id: int | str) -> JsonResult:
        return self.set_id(id).get()

    def get_routes(self, locale: str | None = None) -> JsonResult:
        self.set_endpoint("routes")
        if not is_empty(locale):
            self.set_locale(locale)
        return self.get()

    def get_menus(self, locale: str | None = None) -> JsonResult:
        self.set_endpoint("menus")
        if not is_empty(locale):
            self.set_locale(locale)
        return self.get()

    def find_content(self, content_id: int | str) -> JsonResult:
        return self.set_endpoint("contents").find(content_id)

    def find_listing(self, listing_id: int | str) -> JsonResult:
        endpoint = self._require(self._locator.listing_endpoint())
        return self.set_endpoint(endpoint).find(listing_id)

    def get_location(self, geocode: int | str) -> JsonResult:
        """Find a location of the current list by its cloud geocode."""
        endpoint = self._require(self._locator.location_endpoint())
        return self.set_endpoint(endpoint).find(geocode)

    def find_profile(self, profile_id: int | str) -> JsonResult:
        endpoint = self._require(self._locator.profile_endpoint())
        return self.set_endpoint(endpoint).find(profile_id)

    def resource_not_found(self) -> None:
        raise ResourceNotFoundError()

    async def http_get_request(self, url: str) -> Any:
        """GET ``url`` and return the decoded JSON body.

        The status code is not inspected. httpx errors and JSON decoding
        errors reach the caller unchanged.
        """
        headers = self.get_headers()
        logger.debug("GET %s", url)
        if self._client is not None:
            response = await self._client.get(url, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
                response = await client.get(url, headers=headers)
        logger.debug("GET %s -> %s", url, response.status_code)
        return response.json()

    def _require(self, resolution: EndpointResolution) -> str:
        if isinstance(resolution, MissingScope):
            logger.warning("Storage request aborted: %s", resolution.message)
            raise ConfigurationError(resolution)
        return resolution.endpoint


def storage(
    storage_url: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    settings: StorageSettings | None = None,
) -> StorageBuilder:
    return StorageBuilder(storage_url, client=client, settings=settings)
