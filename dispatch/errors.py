"""
Error taxonomy for the dispatch core.

    CarWashError
    ├── InvalidArgumentError  required input missing or malformed (boundary checks)
    ├── DuplicateKeyError     two strategies claim one key (startup only)
    ├── UnknownKeyError       no strategy for a key (resolution time)
    └── JobCancelledError     cancel signal fired while an action was running

None of these are retried. JobProcessor collects them into a
ProcessingResult; anything outside this hierarchy is a bug and propagates.
"""


class CarWashError(Exception):
    """Base class for every error the dispatch core raises on purpose."""


class InvalidArgumentError(CarWashError, ValueError):

    def __init__(self, name: str, reason: str = "is required"):
        self.name = name
        self.reason = reason
        super().__init__(f"Argument '{name}' {reason}")


class DuplicateKeyError(CarWashError):

    def __init__(self, kind: str, key, implementations: list[str]):
        self.kind = kind
        self.key = key
        self.implementations = implementations
        super().__init__(
            f"Duplicate {kind} registration for key '{_key_str(key)}': "
            f"{', '.join(implementations)}"
        )


class UnknownKeyError(CarWashError, LookupError):

    def __init__(self, kind: str, key, available: list[str]):
        self.kind = kind
        self.key = key
        self.available = available
        super().__init__(
            f"No {kind} strategy registered for key '{_key_str(key)}'. "
            f"Available: {available}"
        )


class JobCancelledError(CarWashError):

    def __init__(self, action_name: str, customer_id: int):
        self.action_name = action_name
        self.customer_id = customer_id
        super().__init__(f"{action_name} cancelled for customer {customer_id}")


def _key_str(key) -> str:
    return str(getattr(key, "value", key))
