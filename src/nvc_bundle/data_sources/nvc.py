"""
National Vaccine Catalogue (NVC) API client.

One method:
  get_bundle  GET {api_url}/v1/Bundle/NVC, the full nomenclature snapshot
"""

from __future__ import annotations

import logging
from typing import Any

from nvc_bundle.config import get_settings
from nvc_bundle.constants import BUNDLE_PATH, FHIR_JSON_ACCEPT
from nvc_bundle.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    RequestContext,
    ResponseFormatError,
)

logger = logging.getLogger("nvc_bundle.data_sources.nvc")


class NVCClient(BaseClient):
    """Client for the NVC FHIR Bundle endpoint."""

    def __init__(
        self,
        api_url: str | None = None,
        app_desc: str | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        super().__init__(config)
        settings = get_settings()
        self.api_url = (api_url if api_url is not None else settings.api_url).rstrip("/")
        self.app_desc = app_desc if app_desc is not None else settings.app_desc

    @property
    def _source_name(self) -> str:
        return "nvc"

    @property
    def bundle_url(self) -> str:
        return f"{self.api_url}{BUNDLE_PATH}"

    @property
    def headers(self) -> dict[str, str]:
        """HTTP headers the NVC API expects on every request."""
        return {
            "Accept": FHIR_JSON_ACCEPT,
            "x-app-desc": self.app_desc,
        }

    async def get_bundle(self) -> dict[str, Any]:
        """Fetch the NVC Bundle as a raw JSON object.

        Raises DataSourceError on any transport failure and ResponseFormatError
        if the body is valid JSON but not an object.
        """
        data = await self._rest_get(
            self.bundle_url,
            headers=self.headers,
            context=RequestContext(source=self._source_name, method="get_bundle"),
        )
        if not isinstance(data, dict):
            raise ResponseFormatError(
                self._source_name,
                f"Expected a JSON object, got {type(data).__name__}",
            )
        return data
