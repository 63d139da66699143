from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from apiservice.core.logging import get_logger

logger = get_logger(__name__)

# RFC 3986 pchar delimiters kept literal, plus the segment separator
PATH_SAFE_CHARS = "/:@!$&'()*+,;="


def append_path_component(base_url: str, path: str) -> str:
    """
    Append ``path`` to the path of ``base_url`` with exactly one separator.

    ``path`` is percent-encoded as path segments, so ``?``, ``#`` and spaces
    stay part of the path instead of starting a query or fragment.

    Args:
        base_url: Absolute URL, may already carry a path and query
        path: Path to append; leading/trailing slashes on either side are tolerated

    Returns:
        The combined URL. An empty path returns ``base_url`` unchanged.

    Raises:
        ValueError: If ``base_url`` cannot be split into URL components
    """
    if not path:
        return base_url

    scheme, netloc, base_path, query, fragment = urlsplit(base_url)
    joined = f"{base_path.rstrip('/')}/{quote(path.lstrip('/'), safe=PATH_SAFE_CHARS)}"
    return urlunsplit((scheme, netloc, joined, query, fragment))


def build_url(request) -> str:
    """
    Resolve the full URL of a request descriptor.

    Query parameters are attached as query items when present. If that
    composition fails, the base+path URL is returned without them.

    Args:
        request: Any APIRequest

    Returns:
        Absolute URL string
    """
    url = append_path_component(request.base_url, request.path)

    query_params = request.query_params
    if not query_params:
        return url

    try:
        return str(httpx.URL(url).copy_merge_params(dict(query_params)))
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        logger.warning(f"Dropping query parameters for {url}: {e}")
        return url
