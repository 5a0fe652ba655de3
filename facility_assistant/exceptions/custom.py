class FetchError(Exception):
    def __init__(self, message: str, status_code: int | None = None, attempts: int = 0):
        self.message = message
        self.status_code = status_code
        self.attempts = attempts
        super().__init__(message)


class ExtractionError(Exception):
    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class StorageError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
