"""Bridge domain exceptions."""

from __future__ import annotations


class BridgeError(Exception):
    """Base for bridge domain errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class BridgeConfigurationError(BridgeError):
    """Config validation or load failure."""


class UnknownSourceError(BridgeConfigurationError):
    """No push-source factory is registered for the requested kind."""


class SinkAlreadyRegisteredError(BridgeError):
    """A push-source accepts exactly one callback sink."""


class ProducerError(BridgeError):
    """Failure reported by a push-source through on_error.

    The payload is opaque: whatever the source passed is kept in
    ``details["payload"]`` and, when it is an exception, in ``original_error``.
    """

    def __init__(self, payload: object) -> None:
        original = payload if isinstance(payload, BaseException) else None
        super().__init__(
            f"producer failed: {payload!r}",
            code="producer_error",
            details={"payload": payload},
            original_error=original,
        )
        self.payload = payload

    @classmethod
    def wrap(cls, payload: object) -> ProducerError:
        """Return payload unchanged if it already is a ProducerError."""
        if isinstance(payload, ProducerError):
            return payload
        return cls(payload)
