class DataSourceError(Exception):
    """The round source could not be fetched or returned an unusable payload."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
