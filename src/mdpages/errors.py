"""Exception types raised by the document pipeline and its collaborators"""


class MdPagesError(Exception):
    """Base class for mdpages errors."""


class DocumentNotFoundError(MdPagesError, FileNotFoundError):
    """A source path does not resolve in the source store; fatal to that single load only."""

    def __init__(self, path: str):
        self.path = path
        self.name = path.rstrip('/').rsplit('/', 1)[-1]
        super().__init__(f"Document not found: {self.name}")


class ConfigurationError(MdPagesError, RuntimeError):
    """A required collaborator was not supplied before use (a wiring error, not a data error)."""
