# src/bigfile_explorer/exceptions.py

class ExplorerError(Exception):
    """Base exception class for explorer-related errors"""
    pass

class ConfigError(ExplorerError):
    """Raised when the configuration file cannot be loaded"""
    pass

class NodeError(ExplorerError):
    """Base exception class for upstream node errors"""

    def __init__(self, message: str, url: str = "", status: int = 0):
        super().__init__(message)
        self.url = url
        self.status = status

class NodeUnavailableError(NodeError):
    """Raised when the node cannot be reached (network, DNS, TLS, timeout)"""
    pass

class NodeNotFoundError(NodeError):
    """Raised when the node answers 404 for a resource"""
    pass

class NodeResponseError(NodeError):
    """Raised when the node answers with an error status or an unreadable body"""
    pass
