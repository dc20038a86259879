import logging
import time
from typing import Callable

import requests

from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024


class HttpService:
    """
    GET pages with a cap on the whole request.

    `requests` applies `timeout` to the connect and to each socket read, so a
    server that drips its body can hold a call open far longer. The body is
    therefore streamed and the read is abandoned once `timeout` seconds have
    passed since the request started.

    Requires http_client callable for dependency injection so tests can pass
    a fake instead of patching `requests`.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 5.0):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        """GET `url` and return status code, body text and Content-Type."""
        headers = {"User-Agent": self.user_agent}
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        try:
            body = self._read_body(url, resp, deadline)
        finally:
            resp.close()

        content_type = resp.headers.get("Content-Type")
        return HttpResponse(resp.status_code, self._decode(resp, body), content_type)

    def _read_body(self, url: str, resp, deadline: float) -> bytes:
        chunks = []
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise requests.exceptions.Timeout(
                        f"body not read within {self.timeout}s ({sum(map(len, chunks))} bytes)"
                    )
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e
        return b"".join(chunks)

    @staticmethod
    def _decode(resp, body: bytes) -> str:
        encoding = resp.encoding or "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            logger.debug("Unknown charset %r, decoding as utf-8", encoding)
            return body.decode("utf-8", errors="replace")
