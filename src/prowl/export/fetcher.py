"""Page fetcher — GET rendered pages from the dynamic server.

One request per export target, no retries.  The server is a local process
started for the export, so any failure is reported straight away.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from prowl._errors import FetchError

if TYPE_CHECKING:
    from types import TracebackType

    from prowl._types import Locale, RoutePath

# Query parameter the locale middleware reads
LOCALE_PARAM = "culture"

# Characters left as-is in the route path (RFC 3986 pchar plus "/")
_PATH_SAFE = "/:@!$&'()*+,;=%"


def build_url(base_url: str, route: RoutePath, locale: Locale) -> str:
    """Join *base_url* and *route* and select *locale*.

    Exactly one slash separates the two parts.  The route path is
    percent-encoded, so characters such as ``#`` or spaces in a slug stay
    in the path.  The locale parameter is appended after any query the
    route already carries.

        >>> build_url("http://localhost:5055", "/News", "en-US")
        'http://localhost:5055/News?culture=en-US'

    """
    path, sep, query = route.partition("?")
    url = base_url.rstrip("/") + "/" + quote(path.lstrip("/"), safe=_PATH_SAFE)
    separator = "&" if sep else "?"
    return f"{url}{sep}{query}{separator}{LOCALE_PARAM}={quote(locale, safe='')}"


class PageFetcher:
    """Fetches rendered markup over one shared ``httpx.Client``.

    ``httpx.Client`` is thread-safe, so a single fetcher serves every worker.

    Args:
        timeout: Per-request timeout in seconds.
        client: Pre-built client (e.g. with a ``MockTransport``).  The fetcher
            closes it on exit either way.

    """

    __slots__ = ("_client",)

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._client = client if client is not None else httpx.Client(
            timeout=timeout,
            follow_redirects=True,
        )

    def fetch(self, base_url: str, route: RoutePath, locale: Locale) -> str:
        """Return the markup the server renders for *route* in *locale*.

        Raises:
            FetchError: On a transport error or a non-success status.

        """
        url = build_url(base_url, route, locale)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"GET {url} returned HTTP {exc.response.status_code}"
            raise FetchError(msg, url=url, status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            msg = f"GET {url} failed: {exc}"
            raise FetchError(msg, url=url) from exc
        return response.text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PageFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
