from typing import Optional, Union
from ..config import CouchbaseConfig
from ..exceptions import ConfigurationError
from .couchbase import CouchbaseConnector

_SUPPORTED_SCHEMES = ("couchbase://", "couchbases://")

def get_connector(config: Union[str, CouchbaseConfig], alias: str = "unknown", *,
                  bucket: Optional[str] = None, username: Optional[str] = None,
                  password: Optional[str] = None) -> CouchbaseConnector:
    """
    Factory function to create a connector instance.
    Accepts either a CouchbaseConfig object or a bare connection string,
    in which case bucket and credentials must be passed explicitly.
    """
    if isinstance(config, CouchbaseConfig):
        connection_string = config.connection_string
        alias = config.alias
        bucket = config.bucket
        username = config.username
        password = config.password
    else:
        connection_string = config
        if not bucket or username is None or password is None:
            raise ConfigurationError("bucket, username and password are required with a bare connection string")

    if not connection_string.startswith(_SUPPORTED_SCHEMES):
        raise ConfigurationError(
            f"Unsupported connection string for '{alias}': {connection_string} "
            f"(expected one of {', '.join(_SUPPORTED_SCHEMES)})"
        )

    return CouchbaseConnector(connection_string, username, password, bucket, alias)
