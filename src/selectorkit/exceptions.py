# Custom exceptions for selectorkit

class SelectorKitError(Exception):
    """Base exception for all application-specific errors."""
    pass


class MalformedSelector(SelectorKitError):
    """Raised when selector text violates the selector grammar."""
    def __init__(self, text, message: str):
        self.text = text
        self.message = message
        super().__init__(f"Malformed selector {text!r}: {message}")


class PreconditionViolation(SelectorKitError):
    """Raised when a factory entry point receives a null, blank or invalid argument."""
    pass


class ResolutionError(SelectorKitError):
    """Base for failures raised lazily while resolving a selector."""
    pass


class UnresolvableSymbol(ResolutionError):
    """Raised when a container or member cannot be found."""
    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(message)


class ContainerLoadError(UnresolvableSymbol):
    """Raised when a container name is malformed or its module fails to import."""
    def __init__(self, name: str, message: str, cause: Exception = None):
        self.cause = cause
        super().__init__(name, message)


class AmbiguousSymbol(ResolutionError):
    """Raised when a name-only member lookup matches several overloads."""

    def __init__(self, container_name: str, member_name: str, candidates: list):
        self.container_name = container_name
        self.member_name = member_name
        self.candidates = list(candidates)
        rendered = ", ".join(c.describe() for c in self.candidates)
        super().__init__(
            f"Member [{member_name}] in class [{container_name}] is overloaded; "
            f"specify parameter types to choose one of: {rendered}"
        )
