"""Client for the OMDB REST API.

One ``OmdbClient`` is built per process. It owns a pooled ``requests``
session carrying the fixed headers, and wraps every outbound GET in the
transient-failure retry policy from :mod:`omdb_proxy.retry`. Each attempt
is capped by a wall-clock timeout covering connect, headers and body.
"""
from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable

import requests

from .config import BACKOFF_BASE, MAX_RETRIES, OMDB_URL, REQUEST_TIMEOUT_SECONDS
from .errors import (
    DecodeError,
    InvalidRequestError,
    OmdbError,
    UpstreamHttpError,
    UpstreamTimeoutError,
)
from .models import LookupRequest, LookupResult, SearchRequest, SearchResult
from .retry import exponential_backoff, is_transient, retry_on
from .utils import decode_lookup_result, decode_search_result

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 1024

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}

Params = list[tuple[str, str]]


def build_lookup_params(lookup: LookupRequest, api_key: str) -> Params:
    return [
        ("apikey", api_key),
        ("i", lookup.imdb_id or ""),
        ("t", lookup.title or ""),
        ("type", lookup.type or ""),
        ("y", lookup.year or ""),
        ("plot", lookup.plot or ""),
        ("r", lookup.return_type or ""),
        ("callback", lookup.callback or ""),
        ("v", lookup.version or ""),
    ]


def build_search_params(search: SearchRequest, api_key: str) -> Params:
    return [
        ("apikey", api_key),
        ("s", search.search or ""),
        ("type", search.type or ""),
        ("y", search.year or ""),
        ("r", search.return_type or ""),
        ("page", search.page or ""),
        ("callback", search.callback or ""),
        ("v", search.version or ""),
    ]


class OmdbClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OMDB_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        retries: int = MAX_RETRIES,
        backoff_base: float = BACKOFF_BASE,
        session: requests.Session | None = None,
        sleep: Callable[[float], Any] | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self._get = retry_on(
            is_transient,
            retries=retries,
            backoff=exponential_backoff(backoff_base),
            sleep=sleep,
        )(self._get_once)

    def _read_body(self, params: Params, cancelled: threading.Event) -> bytes:
        response = self.session.get(self.base_url, params=params, timeout=self.timeout, stream=True)
        with response:
            response.raise_for_status()
            body = bytearray()
            for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                if cancelled.is_set():
                    break
                body.extend(chunk)
            return bytes(body)

    def _get_once(self, params: Params) -> bytes:
        # requests only bounds each socket read, so the whole attempt runs in a
        # worker and is abandoned once the wall-clock timeout passes.
        cancelled = threading.Event()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="omdb")
        future = executor.submit(self._read_body, params, cancelled)
        executor.shutdown(wait=False)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as exc:
            cancelled.set()
            raise UpstreamTimeoutError(f"OMDB did not answer within {self.timeout}s") from exc
        except requests.Timeout as exc:
            raise UpstreamTimeoutError(f"OMDB did not answer within {self.timeout}s: {exc}") from exc
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise UpstreamHttpError(str(exc), status_code=status_code) from exc
        except requests.exceptions.ContentDecodingError as exc:
            raise DecodeError(f"OMDB returned a corrupt compressed body: {exc}") from exc
        except (requests.ConnectionError, requests.exceptions.ChunkedEncodingError) as exc:
            raise UpstreamHttpError(f"OMDB unreachable: {exc}") from exc
        except requests.RequestException as exc:
            raise InvalidRequestError(f"OMDB request could not be sent: {exc}") from exc

    def _fetch_json(self, params: Params) -> Any:
        body = self._get(params)
        try:
            return json.loads(body)
        except ValueError as exc:
            raise DecodeError(f"OMDB returned invalid JSON: {exc}") from exc

    def lookup_by_id_or_title(self, lookup: LookupRequest) -> LookupResult:
        try:
            payload = self._fetch_json(build_lookup_params(lookup, self.api_key))
            return decode_lookup_result(payload)
        except OmdbError as exc:
            logger.error("OMDB client: lookup_by_id_or_title error! %s", exc.message)
            raise

    def search_by_title(self, search: SearchRequest) -> SearchResult:
        try:
            payload = self._fetch_json(build_search_params(search, self.api_key))
            return decode_search_result(payload)
        except OmdbError as exc:
            logger.error("OMDB client: search_by_title error! %s", exc.message)
            raise

    def close(self) -> None:
        self.session.close()
