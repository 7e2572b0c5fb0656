"""
Command Sources

Async iterables of trimmed command tokens consumed by Dispatcher.run():

- single_command_source: one token from the command line, then waits forever
- HttpQueueSource: long-polls a queue URL; every 200 body is one command

Transport and read failures are fatal (CommandSourceError) and never retried.
"""

import asyncio
from typing import AsyncIterator, Optional

import httpx

from models.errors import CommandSourceError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.COMMAND)


async def single_command_source(command: str) -> AsyncIterator[str]:
    """Yield `command` once, then park until the consumer is cancelled."""
    log.info("One-shot command", command=command)
    yield command.strip()

    await asyncio.Event().wait()


class HttpQueueSource:
    """
    HTTP GET poll loop against a command queue endpoint.

    - 200 → body (trimmed) is the next command
    - any other status → ignored, poll again (after idle_delay)
    - transport / read error → CommandSourceError

    Example:
        source = HttpQueueSource("http://queue.local/next")
        async for command in source:
            ...
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: Optional[float] = None,
        idle_delay: float = 0.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            url: queue endpoint
            timeout: per-request timeout in seconds (None = wait forever, long-poll)
            idle_delay: pause after a non-200 response
            client: preconfigured client (tests inject a MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self.idle_delay = idle_delay
        self._client = client

        self.received = 0
        self.ignored = 0

    def __aiter__(self) -> AsyncIterator[str]:
        return self._poll()

    async def _poll(self) -> AsyncIterator[str]:
        owns_client = self._client is None
        client = self._client or httpx.AsyncClient(timeout=self.timeout)

        log.info("Polling command queue", url=self.url)

        try:
            while True:
                try:
                    response = await client.get(self.url)
                    body = response.text
                except (httpx.HTTPError, httpx.InvalidURL) as ex:
                    log.error("Command queue request failed", url=self.url, error=str(ex))
                    raise CommandSourceError(self.url, str(ex) or type(ex).__name__) from ex

                if response.status_code == 200:
                    self.received += 1
                    command = body.strip()
                    log.info("Command received", command=command)
                    yield command
                    continue

                self.ignored += 1
                log.debug("Ignoring queue response", status=response.status_code)
                await asyncio.sleep(self.idle_delay)
        finally:
            if owns_client:
                await client.aclose()
