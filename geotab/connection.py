"""Credentials and server location for a MyGeotab database."""

import logging
import os
from typing import TYPE_CHECKING, Any, Mapping

from .client import GeotabClient
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .query import Query

logger = logging.getLogger(__name__)

DEFAULT_PATH = "my.geotab.com"

# Returned by Authenticate when the session lives on the server that was asked.
THIS_SERVER = "ThisServer"


class Connection:
    """A logged-in (or about to log in) MyGeotab user.

    Args:
        username: MyGeotab user name.
        database: Database name.
        session_id: Session from a previous ``Authenticate`` call.
        password: Password, only needed until ``authenticate()`` is called.
        path: Server host name, e.g. "my3.geotab.com".
        client: Shared ``GeotabClient``; one is created when omitted.
        timeout: Request timeout in seconds for a created client.
    """

    def __init__(
        self,
        username: str,
        database: str,
        session_id: str | None = None,
        password: str | None = None,
        path: str = DEFAULT_PATH,
        client: GeotabClient | None = None,
        timeout: float = 30.0,
    ):
        self.username = username
        self.database = database
        self.session_id = session_id
        self.password = password
        self.path = path
        self._owns_client = client is None
        self.client = client if client is not None else GeotabClient(timeout=timeout)

    def __repr__(self) -> str:
        return f"<Connection {self.username}@{self.database} on {self.path}>"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        client: GeotabClient | None = None,
    ) -> "Connection":
        """Build a connection from ``GEOTAB_*`` environment variables.

        Reads GEOTAB_USERNAME, GEOTAB_DATABASE, GEOTAB_PASSWORD,
        GEOTAB_SESSION_ID, GEOTAB_SERVER and GEOTAB_TIMEOUT.
        """
        env = os.environ if environ is None else environ

        username = env.get("GEOTAB_USERNAME")
        database = env.get("GEOTAB_DATABASE")
        if not username or not database:
            raise ConfigurationError("GEOTAB_USERNAME and GEOTAB_DATABASE must be set")

        password = env.get("GEOTAB_PASSWORD") or None
        session_id = env.get("GEOTAB_SESSION_ID") or None
        if not password and not session_id:
            raise ConfigurationError("Either GEOTAB_PASSWORD or GEOTAB_SESSION_ID must be set")

        raw_timeout = env.get("GEOTAB_TIMEOUT") or "30"
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"Invalid GEOTAB_TIMEOUT: {raw_timeout!r}") from None

        return cls(
            username=username,
            database=database,
            session_id=session_id,
            password=password,
            path=env.get("GEOTAB_SERVER") or DEFAULT_PATH,
            client=client,
            timeout=timeout,
        )

    @property
    def url(self) -> str:
        return f"https://{self.path}/apiv1/"

    @property
    def credentials(self) -> dict[str, Any]:
        """Credentials object sent with every request."""
        credentials = {"database": self.database, "userName": self.username}
        if self.session_id:
            credentials["sessionId"] = self.session_id
        else:
            credentials["password"] = self.password
        return credentials

    def authenticate(self) -> "Connection":
        """Exchange the password for a session id.

        The password is discarded afterwards. When the server points at a
        different host for this database, that host is used from now on.

        Raises:
            ConfigurationError: No password is available.
            IncorrectCredentialsError: The server rejected the login.
        """
        if not self.password:
            raise ConfigurationError("A password is required to authenticate")

        payload = {
            "method": "Authenticate",
            "params": {
                "userName": self.username,
                "password": self.password,
                "database": self.database,
            },
        }
        result = self.client.call(self.url, payload) or {}

        credentials = result.get("credentials") or {}
        self.session_id = credentials.get("sessionId")
        self.database = credentials.get("database") or self.database
        self.password = None

        path = result.get("path")
        if path and path != THIS_SERVER:
            self.path = path

        logger.debug("Authenticated %s on %s", self.username, self.path)
        return self

    def query(self, entity_type: type) -> "Query":
        """Start a query for the given entity type."""
        from .query import Query

        return Query(entity_type=entity_type, connection=self)

    def close(self) -> None:
        """Close the HTTP client if this connection created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
