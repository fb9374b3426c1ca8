import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.schemas.summarize import ContentResult, ContentsResponse

logger = logging.getLogger(__name__)


class ContentServiceError(Exception):
    """Failure reported by the content service or while talking to it."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_authentication_error(self) -> bool:
        return self.status_code in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN)


class ContentClient:
    """
    Minimal asynchronous client for the Exa contents endpoint.

    Only the single operation needed here is implemented: fetching the
    contents of one URL together with a generated summary.
    """

    def __init__(self, api_key: str, base_url: str, timeout: float = 60.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def get_contents(self, url: str, summary: bool = True) -> list[ContentResult]:
        """
        Fetches the contents of a single URL from the content service.

        :param url: The URL of the page to summarize.
        :type url: str
        :param summary: Whether the service should generate a summary of the page.
        :type summary: bool
        :return: The results returned by the service, possibly empty.
        :rtype: list[ContentResult]
        :raises ContentServiceError: if the request fails, the service answers with
            an error status or the body can not be read.
        """
        try:
            response = await self._client.post(
                f"{self._base_url}/contents",
                headers={"x-api-key": self._api_key},
                json={"urls": [url], "summary": summary},
            )
        except httpx.HTTPError as e:
            raise ContentServiceError(str(e) or e.__class__.__name__) from e

        if response.is_error:
            raise ContentServiceError(self._error_message(response), status_code=response.status_code)

        try:
            return ContentsResponse.model_validate_json(response.content).results
        except ValidationError as e:
            raise ContentServiceError(f"Unexpected response from content service: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.text or f"Content service returned status {response.status_code}"

    async def aclose(self) -> None:
        await self._client.aclose()
