"""
Structure service client using the Structures server REST API.
"""
import json
from typing import Any, Optional

import aiohttp
import structlog
from pydantic import ValidationError

from ..config import ServerConfig
from ..models.structure import Structure
from .exceptions import (
    RemoteSyncError,
    StructuresAuthError,
    StructuresConnectionError,
    StructuresTimeoutError,
)
from .structure_service import StructureService

logger = structlog.get_logger(__name__)

class HTTPStructureService(StructureService):
    """
    StructureService that talks to a Structures server over HTTP or HTTPS.
    It uses aiohttp.ClientSession for making asynchronous HTTP requests.
    A session passed in by the caller is not closed by this client.
    """

    def __init__(self, server_config: ServerConfig, aiohttp_session: aiohttp.ClientSession | None = None):
        self.server_config = server_config
        self._session = aiohttp_session
        self._owns_session = aiohttp_session is None
        self.base_url = str(server_config.url).rstrip("/") + "/" + server_config.api_path.strip("/")
        self.logger = logger.bind(server_endpoint=self.base_url, transport="http")

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self.logger.debug("No existing aiohttp session or session closed, creating a new one.")
            ssl_context = None
            if self.base_url.startswith("https") and not self.server_config.ssl_verify:
                self.logger.warning("SSL verification is DISABLED for the Structures client. This is insecure for production.")
                ssl_context = False

            auth = None
            if self.server_config.has_credentials:
                auth = aiohttp.BasicAuth(self.server_config.username, self.server_config.password.get_secret_value())

            self._session = aiohttp.ClientSession(connector=aiohttp.TCPConnector(ssl=ssl_context), auth=auth)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            self.logger.debug("aiohttp session closed.")
        self._session = None

    def _url(self, *segments: str) -> str:
        return "/".join([self.base_url, *segments])

    async def _request(self, method: str, url: str, structure_id: Optional[str] = None,
                       payload: Optional[dict[str, Any]] = None, allow_not_found: bool = False) -> Optional[Any]:
        """Sends one request. Returns the decoded JSON body, or None for empty bodies and allowed 404s."""
        session = await self._get_session()
        from .. import __version__

        headers = {
            "Accept": "application/json",
            "User-Agent": f"StructuresCli/{__version__}",
        }
        timeout = aiohttp.ClientTimeout(
            total=self.server_config.request_timeout_seconds,
            connect=self.server_config.connect_timeout_seconds,
        )
        log = self.logger.bind(method=method, url=url, structure_id=structure_id)

        log.debug("Sending HTTP request")
        try:
            async with session.request(method, url, json=payload, headers=headers, timeout=timeout) as response:
                response_text = await response.text()
                log.debug("Received HTTP response", status=response.status, content_length=len(response_text))

                if response.status == 404 and allow_not_found:
                    return None
                if response.status in (401, 403):
                    log.warning("Server rejected credentials", status=response.status, server_response=response_text[:500])
                    raise StructuresAuthError(f"Authentication failed ({response.status}) for {url}",
                                              structure_id=structure_id, status=response.status)
                if response.status >= 300:
                    log.error("HTTP error status received", status=response.status, reason=response.reason, response_body=response_text[:500])
                    raise RemoteSyncError(f"HTTP error {response.status} {response.reason} from {url}",
                                          structure_id=structure_id, status=response.status)

                if not response_text.strip():
                    return None
                try:
                    return json.loads(response_text)
                except json.JSONDecodeError as e:
                    log.error("Failed to decode JSON response", error=str(e), response_text=response_text[:500])
                    raise RemoteSyncError(f"Failed to decode JSON response from server: {e}",
                                          structure_id=structure_id, status=response.status) from e

        except aiohttp.ClientConnectorError as e:
            log.error("Client connector error", error_os_error=e.os_error, error_str=str(e))
            raise StructuresConnectionError(f"Connection failed to {url}: {e.os_error or str(e)}", structure_id=structure_id) from e
        except TimeoutError as e:
            log.error("Request timed out", timeout_total=self.server_config.request_timeout_seconds)
            raise StructuresTimeoutError(f"Request to {url} timed out after {self.server_config.request_timeout_seconds}s.",
                                         structure_id=structure_id) from e
        except aiohttp.ClientError as e:
            log.error("AIOHTTP client error", error_type=type(e).__name__, error_message=str(e))
            raise StructuresConnectionError(f"HTTP client error for {url}: {e}", structure_id=structure_id) from e

    def _to_structure(self, data: Any, structure_id: Optional[str]) -> Structure:
        try:
            return Structure.model_validate(data)
        except ValidationError as e:
            self.logger.error("Server returned an invalid structure", structure_id=structure_id, error=str(e))
            raise RemoteSyncError(f"Invalid structure returned by server: {e}", structure_id=structure_id) from e

    async def find_by_id(self, structure_id: str) -> Optional[Structure]:
        data = await self._request("GET", self._url(structure_id), structure_id, allow_not_found=True)
        if data is None:
            return None
        return self._to_structure(data, structure_id)

    async def create(self, structure: Structure) -> Structure:
        data = await self._request("POST", self._url(), structure.id, payload=structure.to_wire())
        self.logger.info("Structure created", structure_id=structure.id)
        return self._to_structure(data, structure.id) if data is not None else structure

    async def save(self, structure: Structure) -> Structure:
        data = await self._request("PUT", self._url(structure.id), structure.id, payload=structure.to_wire())
        self.logger.info("Structure saved", structure_id=structure.id)
        return self._to_structure(data, structure.id) if data is not None else structure

    async def publish(self, structure_id: str) -> None:
        await self._request("PUT", self._url(structure_id, "publish"), structure_id)
        self.logger.info("Structure published", structure_id=structure_id)

    async def un_publish(self, structure_id: str) -> None:
        await self._request("PUT", self._url(structure_id, "unpublish"), structure_id)
        self.logger.info("Structure unpublished", structure_id=structure_id)

    async def delete_by_id(self, structure_id: str) -> None:
        await self._request("DELETE", self._url(structure_id), structure_id)
        self.logger.info("Structure deleted", structure_id=structure_id)
