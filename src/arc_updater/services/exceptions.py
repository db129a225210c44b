class PathResolutionError(Exception):
    """Raised when a target path cannot be resolved"""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DirectoryQueryError(Exception):
    """Raised when the contents of a target directory cannot be queried"""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class DownloadError(Exception):
    """Raised when a remote resource cannot be fetched in time"""

    pass
