class DoesNotExist(Exception):  # noqa: N818
    """Exception raised when a resource does not exist."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f'{resource_type} with ID "{resource_id!s}" does not exist')


class StorageError(Exception):
    """
    Exception raised when the data file cannot be read or written.

    The operation that raised it is aborted; nothing is retried.
    """

    def __init__(self, operation: str, error: Exception):
        self.operation = operation
        self.error = error
        super().__init__(f"Storage error while {operation}: {error!s}")


class ValidationError(ValueError):
    """Exception raised when form input is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("\n".join(f"- {error}" for error in errors))
