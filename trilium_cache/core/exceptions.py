__all__ = [
    "ServerError",
]


class ServerError(Exception):
    """
    Raised when a request to the Trilium server fails, either at the
    transport level or with an unsuccessful HTTP status.

    Absence of a note, branch or attribute is never reported this way; lookups
    resolve to `None`{l=python} or are omitted from results instead.
    """

    path: str
    status: int | None

    def __init__(self, path: str, status: int | None, reason: str):
        self.path = path
        self.status = status
        super().__init__(
            f"Request to '{path}' failed: status={status}, reason={reason}"
        )
