"""
Remote reads for reactive entities.

``fetch`` performs a blocking ``requests.get`` on the running event loop's
default executor so that only the awaiting coroutine is suspended; event
dispatch never waits on the network. The raw ``requests.Response`` is returned
untouched: non-2xx statuses are not errors here, and nothing is written into a
store. Parsing and assignment belong to the caller.
"""

import asyncio
import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import requests


class FetchError(Exception):
    """Raised when a remote read cannot be performed or the transport fails."""

    pass


async def fetch(url: str, *, timeout: Optional[float] = None) -> requests.Response:
    """GET ``url`` without blocking the event loop and return the raw response."""
    loop = asyncio.get_running_loop()
    request = functools.partial(requests.get, url, timeout=timeout)
    logging.debug(f"Fetching {url}")
    try:
        return await loop.run_in_executor(None, request)
    except requests.RequestException as e:
        logging.error(f"Fetch of {url} failed: {e}")
        raise FetchError(f"GET {url} failed: {e}") from e


class Fetchable:
    """
    Mixin giving an entity an awaitable ``fetch``.

    The default URL comes from ``properties["url"]`` and the timeout from
    ``properties["timeout"]``. ``fetcher`` is the network capability and can be
    replaced on a subclass or an instance, as a plain function or a
    ``staticmethod``; it is looked up without binding, so it never receives
    ``self``.
    """

    properties: Dict[str, Any] = {"url": None}
    fetcher: Callable[..., Awaitable[Any]] = staticmethod(fetch)

    async def fetch(self, url: Optional[str] = None) -> Any:
        target = url or self.properties.get("url")
        if not target:
            raise FetchError(f"{type(self).__name__} has no URL to fetch")
        fetcher = inspect.getattr_static(self, "fetcher")
        if isinstance(fetcher, staticmethod):
            fetcher = fetcher.__func__
        return await fetcher(target, timeout=self.properties.get("timeout"))
