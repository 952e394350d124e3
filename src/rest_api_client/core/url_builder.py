"""
URL building for rest_api_client.
"""
import logging
from typing import Any, Iterable, Iterator, List
from urllib.parse import urljoin

logger = logging.getLogger("rest_api_client.url_builder")


def flatten_slugs(slugs: Iterable[Any]) -> Iterator[Any]:
    """Flatten arbitrarily nested lists/tuples of slugs, in order."""
    for slug in slugs:
        if isinstance(slug, (list, tuple)):
            yield from flatten_slugs(slug)
        else:
            yield slug


def join_slugs(*slugs: Any) -> str:
    """Join slugs with ``/``, skipping None."""
    parts: List[str] = [str(slug) for slug in flatten_slugs(slugs) if slug is not None]
    return "/".join(parts)


def build_url(base_url: str, *slugs: Any) -> str:
    """
    Resolve URL slugs against ``base_url``.

    The joined slugs are resolved as ``./<slugs>``, so the base path is kept
    and the slugs are appended below it::

        build_url("https://host:443/api/", "widgets", ["42"])
        # "https://host:443/api/widgets/42"

    Standard relative resolution still applies to the slugs themselves
    (``..`` climbs out of the base path, a slug with ``?`` starts a query).
    """
    # urljoin replaces the last segment if base doesn't end with /
    if not base_url.endswith("/"):
        base_url = base_url + "/"

    relative = "./" + join_slugs(*slugs)
    url = urljoin(base_url, relative)
    logger.debug(f"build_url: base_url={base_url}, relative={relative} -> {url}")
    return url
