class FieldRepError(Exception):
    """Base class for every error raised by the request core."""
    pass


class FormValidationError(FieldRepError):
    """
    One or more draft fields are invalid.
    Rendered inline next to each field; never shown as a global alert.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__(", ".join(f"{k}: {v}" for k, v in self.errors.items()))


class IdentityMissingError(FieldRepError):
    """
    No authenticated owner. Operations abort silently with a log entry;
    the session collaborator is expected to have prevented this upstream.
    """
    pass


class RemoteError(FieldRepError):
    """
    A fetch or create against the document store failed (network,
    permission or store-side). Never retried by the core.
    """

    def __init__(self, operation: str, collection: str, detail: str = ""):
        self.operation = operation
        self.collection = collection
        self.detail = detail
        super().__init__(f"{operation} on '{collection}' failed: {detail}" if detail else f"{operation} on '{collection}' failed")
