# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""HTTP utilities for autorelease.

Provides a managed :class:`httpx.AsyncClient` and :func:`send_request`,
a single-attempt request helper.

Requests are never retried: a transient API failure fails the run and
the next CI trigger starts over from the latest published release.

Usage::

    from autorelease.net import http_client, send_request

    async with http_client(headers=headers) as client:
        response = await send_request(client, 'GET', url, expected=(200,))
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Collection
from contextlib import asynccontextmanager
from typing import Final

import httpx

from autorelease.errors import E, AutoReleaseError
from autorelease.logging import get_logger

log = get_logger('autorelease.net')

DEFAULT_POOL_SIZE: Final[int] = 4
DEFAULT_TIMEOUT: Final[float] = 30.0

# Longest slice of an error body copied into an error message.
_MAX_ERROR_BODY: Final[int] = 500


@asynccontextmanager
async def http_client(
    *,
    pool_size: int = DEFAULT_POOL_SIZE,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str = '',
    headers: dict[str, str] | None = None,
) -> AsyncGenerator[httpx.AsyncClient]:
    """Create a managed async HTTP client with connection pooling.

    Args:
        pool_size: Maximum number of connections in the pool.
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.
        headers: Optional default headers.

    Yields:
        An :class:`httpx.AsyncClient` instance.
    """
    limits = httpx.Limits(
        max_connections=pool_size,
        max_keepalive_connections=pool_size,
    )
    async with httpx.AsyncClient(
        limits=limits,
        timeout=httpx.Timeout(timeout),
        base_url=base_url,
        headers=headers or {},
        follow_redirects=True,
    ) as client:
        yield client


def _excerpt(response: httpx.Response) -> str:
    text = response.text.strip()
    if len(text) > _MAX_ERROR_BODY:
        return text[:_MAX_ERROR_BODY] + '...'
    return text


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    expected: Collection[int] = (200,),
    **kwargs: object,
) -> httpx.Response:
    """Make one HTTP request and check its status.

    Args:
        client: The httpx async client to use.
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        expected: Status codes returned to the caller instead of raising.
            Callers that give a status its own meaning (e.g. 404 for
            "no releases") include it here.
        **kwargs: Additional keyword arguments passed to ``client.request()``.

    Returns:
        The :class:`httpx.Response`.

    Raises:
        AutoReleaseError: ``AR-FORGE-REQUEST-FAILED`` on a transport error
            or an unexpected status code.
    """
    try:
        response = await client.request(method, url, **kwargs)  # type: ignore[arg-type]
    except httpx.HTTPError as exc:
        log.error('http_transport_error', method=method, url=url, error=str(exc))
        raise AutoReleaseError(
            code=E.FORGE_REQUEST_FAILED,
            message=f'{method} {url} failed: {exc}',
        ) from exc

    log.debug('http_response', method=method, url=url, status=response.status_code)
    if response.status_code not in expected:
        raise AutoReleaseError(
            code=E.FORGE_REQUEST_FAILED,
            message=f'{method} {url} returned HTTP {response.status_code}: {_excerpt(response)}',
            hint='Check that the token can read and write releases for this repository.',
        )
    return response


__all__ = [
    'DEFAULT_POOL_SIZE',
    'DEFAULT_TIMEOUT',
    'http_client',
    'send_request',
]
