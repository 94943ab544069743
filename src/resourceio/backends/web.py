"""Read-only HTTP(S) backend over the shared httpx client."""

from __future__ import annotations

import logging

import httpx

from resourceio.backends.base import Backend
from resourceio.clients import TransportClients
from resourceio.errors import PermanentAccessError, ResourceError, TransientAccessError
from resourceio.locator import WebLocation
from resourceio.result import Failure, Result, Success


_logger = logging.getLogger(__name__)

_ABSENT_STATUSES = frozenset({404, 410})


def is_transient_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in (408, 429)


class WebBackend(Backend[WebLocation]):
    """GET-based existence checks and downloads. Write, list and delete are unsupported."""

    name = "web"

    def __init__(self, clients: TransportClients) -> None:
        self._clients = clients

    async def _get(
        self, operation: str, address: WebLocation
    ) -> Result[httpx.Response, ResourceError]:
        _logger.debug(f"GET {address.url} in {operation}()")
        try:
            response = await self._clients.http.get(address.url)
        except httpx.InvalidURL as exc:
            return Failure(PermanentAccessError(operation, address.url, str(exc)))
        except httpx.TransportError as exc:
            message = str(exc) or type(exc).__name__
            return Failure(TransientAccessError(operation, address.url, message, cause=exc))
        except httpx.HTTPError as exc:
            # redirect loops, undecodable Content-Encoding
            message = str(exc) or type(exc).__name__
            return Failure(PermanentAccessError(operation, address.url, message))
        if is_transient_status(response.status_code):
            return Failure(
                TransientAccessError(
                    operation, address.url, response.reason_phrase, code=str(response.status_code)
                )
            )
        return Success(response)

    async def exists(self, address: WebLocation) -> Result[bool, ResourceError]:
        return (await self._get("exists", address)).map(lambda response: response.is_success)

    async def read(self, address: WebLocation) -> Result[bytes | None, ResourceError]:
        match await self._get("read", address):
            case Success(response) if response.status_code in _ABSENT_STATUSES:
                return Success(None)
            case Success(response) if response.is_success:
                return Success(response.content)
            case Success(response):
                return Failure(
                    PermanentAccessError(
                        "read", address.url, response.reason_phrase, code=str(response.status_code)
                    )
                )
            case Failure(error):
                return Failure(error)
            case _:
                raise AssertionError("Unreachable: GET outcome match exhaustive")


__all__ = ["WebBackend", "is_transient_status"]
