"""Chainable queries against the Geotab ``Get`` and ``GetFeed`` methods.

Conditions use the format of Geotab's SDK search objects and are passed to
the API as-is::

    devices = (
        Device.with_connection(conn)
        .where({"serialNumber": "G7B020D3E1A4"})
        .where({"name": "07 BMW 335i"})
        .all()
    )

    defect = Defect.find(conn, "b2775")

A ``Query`` is an immutable value: ``where`` and ``limit`` return a new
query, so nothing is left behind on the entity type after a request.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from .connection import Connection
from .types import FeedResult

# Types the API only knows as groups.
GROUP_ENTITIES = frozenset({"Defect"})


def geotab_reference_name(entity: type | str) -> str:
    """Return the ``typeName`` the API expects for an entity.

    Types listed in ``GROUP_ENTITIES`` are queried as "Group". Names using
    "Datum" are sent as "Data" (``StatusDatum`` -> ``StatusData``). A class
    can set ``geotab_type_name`` to bypass the mapping.
    """
    if isinstance(entity, type):
        override = getattr(entity, "geotab_type_name", None)
        if override:
            return override
        name = entity.__name__
    else:
        name = entity.rsplit(".", 1)[-1]

    if name in GROUP_ENTITIES:
        return "Group"
    return name.replace("Datum", "Data")


@dataclass(frozen=True)
class Query:
    """A pending query for one entity type over one connection."""

    entity_type: type
    connection: Connection
    conditions: Mapping[str, Any] = field(default_factory=dict, hash=False)
    results_limit: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "conditions", MappingProxyType(dict(self.conditions)))

    @property
    def type_name(self) -> str:
        return geotab_reference_name(self.entity_type)

    def where(self, conditions: Mapping[str, Any] | None = None, **kwargs: Any) -> "Query":
        """Add search conditions; later keys replace earlier ones."""
        merged = {**self.conditions, **(conditions or {}), **kwargs}
        return replace(self, conditions=merged)

    def limit(self, results_limit: int) -> "Query":
        """Cap the number of records the server returns."""
        if results_limit <= 0:
            raise ValueError(f"results_limit must be positive, got {results_limit}")
        return replace(self, results_limit=results_limit)

    def build_request(self, method: str, **extra: Any) -> dict[str, Any]:
        """Build the JSON-RPC envelope for this query."""
        params: dict[str, Any] = {
            "typeName": self.type_name,
            "credentials": self.connection.credentials,
            "search": dict(self.conditions),
        }
        if self.results_limit is not None:
            params["resultsLimit"] = self.results_limit
        params.update(extra)
        return {"method": method, "params": params}

    def all(self) -> list[Any]:
        """Run the query and return entities in server order."""
        result = self._call(self.build_request("Get"))
        return self._to_entities(result)

    def first(self) -> Any | None:
        results = self.all()
        return results[0] if results else None

    def find(self, id: Any) -> Any | None:  # noqa: A002
        """Fetch a single record by id.

        Most Geotab types reject other conditions once an id is given.
        """
        return self.where({"id": str(id)}).first()

    def get_feed(self, from_version: str | None = None) -> FeedResult:
        """Fetch records changed since ``from_version``.

        Pass the returned ``to_version`` on the next call to continue the
        feed.
        """
        result = self._call(self.build_request("GetFeed", fromVersion=from_version))
        feed = FeedResult.from_result(result)
        feed.results = self._to_entities(feed.results)
        return feed

    def _call(self, payload: dict[str, Any]) -> Any:
        return self.connection.client.call(self.connection.url, payload)

    def _to_entities(self, records: Any) -> list[Any]:
        if not records:
            return []
        return [self.entity_type(record, self.connection) for record in records]
