"""Maven Central search client.

Queries the Solr ``gav`` core for every published version of a coordinate.
Only the first page of results is read: if more than ``Settings.rows``
versions exist, older ones are never seen by the selector.
"""

from typing import Any

import requests
from pydantic import BaseModel, ValidationError

from .config import Settings
from .downloaders import retrying
from .errors import RegistryError, RegistryResponseError, RegistryStatusError
from .models import Coordinate


class _Doc(BaseModel):
    v: str


class _Response(BaseModel):
    docs: list[_Doc]


class SearchResult(BaseModel):
    """Shape of a Solr search body: ``{response: {docs: [{v: ...}]}}``."""

    response: _Response

    @property
    def versions(self) -> list[str]:
        return [doc.v for doc in self.response.docs]


def build_query(coordinate: Coordinate, rows: int = 20) -> dict[str, Any]:
    """Build the Solr query parameters for ``coordinate``.

    ``requests`` encodes the spaces as ``+``, giving
    ``q=g:<group>+AND+a:<artifact>`` on the wire.
    """
    return {
        "q": f"g:{coordinate.group} AND a:{coordinate.artifact}",
        "core": "gav",
        "rows": rows,
        "wt": "json",
    }


def parse_search_result(body: str) -> list[str]:
    """Extract the version list from a raw search response body.

    Raises:
        RegistryResponseError: if the body isn't JSON of the expected shape.
    """
    try:
        result = SearchResult.model_validate_json(body)
    except ValidationError as e:
        raise RegistryResponseError(f"Unexpected search response: {e}") from e
    return result.versions


def search_versions(
    session: requests.Session,
    coordinate: Coordinate,
    settings: Settings,
) -> list[str]:
    """List the versions the registry knows for ``coordinate``.

    Args:
        session: Requests session.
        coordinate: Group and artifact to look up.
        settings: Endpoint, page size, timeouts and retry count.

    Returns:
        Version strings in the order the registry returned them.

    Raises:
        RegistryStatusError: on a non-2xx answer (status and body kept).
        RegistryResponseError: on a malformed 2xx body.
        RegistryError: on a transport failure.
    """
    try:
        r = retrying(settings.http_retries)(
            session.get,
            settings.search_url,
            params=build_query(coordinate, settings.rows),
            timeout=settings.http_timeout,
        )
    except requests.RequestException as e:
        raise RegistryError(f"Request to {settings.search_url} failed: {e}") from e

    if not r.ok:
        raise RegistryStatusError(r.status_code, r.text)
    return parse_search_result(r.text)
