class CouchprobeException(Exception):
    """Base Exception Class"""
    pass

class ConnectionError(CouchprobeException):
    """Cluster connection or client call failure"""
    pass

class ConfigurationError(CouchprobeException):
    """Configuration Error"""
    pass
