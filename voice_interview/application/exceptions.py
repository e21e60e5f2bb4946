class InvalidInputError(ValueError):
    """Raised when a scoring request fails validation (not-a-list, empty, length-mismatch)."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, quota, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (empty completion text)."""
    pass


class CapabilityUnavailableError(RuntimeError):
    """Raised when speech output or speech capture is not supported on this host."""
    pass
