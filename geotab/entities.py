"""MyGeotab entity types.

Each entity wraps the JSON object the API returned for it. Common fields are
exposed as read-only properties; anything else is available by key::

    device = Device.find(conn, "b12")
    device.serial_number
    device["timeZoneId"]
"""

from typing import Any, Mapping

from .connection import Connection
from .query import Query
from .types import FeedResult


def _field(key: str, doc: str | None = None) -> property:
    def getter(self: "Entity") -> Any:
        return self.attributes.get(key)

    return property(getter, doc=doc or f"The ``{key}`` field.")


def _reference(key: str) -> property:
    """Id of a nested ``{"id": ...}`` reference, e.g. ``device``."""

    def getter(self: "Entity") -> str | None:
        value = self.attributes.get(key)
        if isinstance(value, Mapping):
            return value.get("id")
        return value

    return property(getter, doc=f"Id of the referenced ``{key}``.")


class Entity:
    """Base class for records returned by the API.

    Query entry points are classmethods that return a new ``Query``; the
    class itself never holds conditions or a connection.
    """

    #: Overrides the ``typeName`` derived from the class name.
    geotab_type_name: str | None = None

    def __init__(self, attributes: Mapping[str, Any], connection: Connection | None = None):
        self.attributes = dict(attributes)
        self.connection = connection

    id = _field("id", "Record identifier.")

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.attributes == other.attributes

    __hash__ = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"

    @classmethod
    def with_connection(cls, connection: Connection) -> Query:
        return connection.query(cls)

    @classmethod
    def where(cls, connection: Connection, conditions: Mapping[str, Any] | None = None, **kwargs: Any) -> Query:
        return cls.with_connection(connection).where(conditions, **kwargs)

    @classmethod
    def find(cls, connection: Connection, id: Any) -> "Entity | None":  # noqa: A002
        return cls.with_connection(connection).find(id)

    @classmethod
    def all(cls, connection: Connection) -> list["Entity"]:
        return cls.with_connection(connection).all()

    @classmethod
    def first(cls, connection: Connection) -> "Entity | None":
        return cls.with_connection(connection).first()

    @classmethod
    def get_feed(cls, connection: Connection, from_version: str | None = None) -> FeedResult:
        return cls.with_connection(connection).get_feed(from_version)


class Device(Entity):
    name = _field("name")
    serial_number = _field("serialNumber")
    device_type = _field("deviceType")
    active_from = _field("activeFrom")
    active_to = _field("activeTo")


class User(Entity):
    name = _field("name")
    first_name = _field("firstName")
    last_name = _field("lastName")
    is_driver = _field("isDriver")


class Group(Entity):
    name = _field("name")
    color = _field("color")

    @property
    def children(self) -> list[str]:
        """Ids of the child groups."""
        return [child.get("id") for child in self.attributes.get("children") or []]


class Defect(Group):
    """A defect; the API stores defects as groups."""


class Diagnostic(Entity):
    name = _field("name")
    code = _field("code")
    unit_of_measure = _reference("unitOfMeasure")


class StatusDatum(Entity):
    data = _field("data")
    date_time = _field("dateTime")
    device_id = _reference("device")
    diagnostic_id = _reference("diagnostic")


class FaultDatum(Entity):
    date_time = _field("dateTime")
    fault_state = _field("faultState")
    device_id = _reference("device")
    diagnostic_id = _reference("diagnostic")


class LogRecord(Entity):
    date_time = _field("dateTime")
    latitude = _field("latitude")
    longitude = _field("longitude")
    speed = _field("speed")
    device_id = _reference("device")


class Trip(Entity):
    start = _field("start")
    stop = _field("stop")
    distance = _field("distance")
    device_id = _reference("device")
    driver_id = _reference("driver")


class ExceptionEvent(Entity):
    active_from = _field("activeFrom")
    active_to = _field("activeTo")
    device_id = _reference("device")
    rule_id = _reference("rule")


class Rule(Entity):
    name = _field("name")
    base_type = _field("baseType")


class Zone(Entity):
    name = _field("name")
    points = _field("points")


class DeviceStatusInfo(Entity):
    latitude = _field("latitude")
    longitude = _field("longitude")
    speed = _field("speed")
    is_driving = _field("isDriving")
    device_id = _reference("device")
