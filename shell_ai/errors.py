"""Error taxonomy for Shell AI."""


class ShellAIError(Exception):
    """Base class for Shell AI failures."""


class ValidationFailure(ShellAIError):
    """Request rejected before reaching the backend (e.g. empty prompt)."""


class BackendUnavailable(ShellAIError):
    """The LLM backend could not be reached (network, auth, rate limit)."""


class InvalidResponse(ShellAIError):
    """The LLM backend answered without usable content."""


class PersistenceFailure(ShellAIError):
    """History write or read failed. Logged, never surfaced."""
