"""Exception types raised by scriptguard."""


class ScriptGuardError(Exception):
    """Base class for scriptguard errors."""


class UnknownTypeError(ScriptGuardError, LookupError):
    """Raised when a type name cannot be resolved.

    A catalog entry naming a type that cannot be loaded is broken, which is
    different from an entry naming a member that is simply not there.

    Attributes:
        type_name: The name that failed to resolve.
    """

    def __init__(self, type_name: str, reason: str | None = None) -> None:
        message = f"Unknown type: {type_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.type_name = type_name


class RejectedAccessError(ScriptGuardError):
    """Raised by an interceptor when a whitelist denies an operation.

    Attributes:
        signature: Canonical text of the denied operation, suitable for
            pasting into a catalog once approved.
        details: Optional runtime context, such as argument types.
    """

    def __init__(self, signature: str, details: str | None = None) -> None:
        message = RejectedAccessError.default_message(signature)
        if details:
            message = f"{message} ({details})"
        super().__init__(message)
        self.signature = signature
        self.details = details

    @staticmethod
    def default_message(signature: str) -> str:
        return f"Scripts not permitted to use {signature}"
