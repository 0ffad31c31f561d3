"""Geotab Python Client.

A query-builder client for the MyGeotab JSON-RPC API.

Usage:
    from geotab import Connection, Device, StatusDatum

    conn = Connection("user@example.com", "my_database", password="...").authenticate()

    # Filtered list query
    devices = Device.with_connection(conn).where({"serialNumber": "G7B020D3E1A4"}).all()

    # Single record by id
    device = Device.find(conn, "b12")

    # Incremental feed
    feed = StatusDatum.get_feed(conn)
    more = StatusDatum.get_feed(conn, feed.to_version)
"""

from .client import GeotabClient
from .connection import Connection
from .entities import (
    Defect,
    Device,
    DeviceStatusInfo,
    Diagnostic,
    Entity,
    ExceptionEvent,
    FaultDatum,
    Group,
    LogRecord,
    Rule,
    StatusDatum,
    Trip,
    User,
    Zone,
)
from .exceptions import ApiError, ConfigurationError, GeotabError, IncorrectCredentialsError
from .query import Query, geotab_reference_name
from .types import ErrorKind, Failure, FeedResult, Success

__version__ = "0.1.0"
__all__ = [
    "GeotabClient",
    "Connection",
    "Query",
    "geotab_reference_name",
    "Entity",
    "Defect",
    "Device",
    "DeviceStatusInfo",
    "Diagnostic",
    "ExceptionEvent",
    "FaultDatum",
    "Group",
    "LogRecord",
    "Rule",
    "StatusDatum",
    "Trip",
    "User",
    "Zone",
    "GeotabError",
    "ApiError",
    "IncorrectCredentialsError",
    "ConfigurationError",
    "ErrorKind",
    "Failure",
    "FeedResult",
    "Success",
]
