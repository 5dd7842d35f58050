"""Custom exceptions for the distribution tool."""


class RewardFlowError(Exception):
    """Base exception for all distribution tool errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RewardFlowError):
    """Raised when run configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str):
        full_message = f"Configuration error [{config_key}]: {message}"
        super().__init__(full_message, {"config_key": config_key})
        self.config_key = config_key


class HolderValidationError(RewardFlowError):
    """Raised when a holder record is malformed."""

    def __init__(self, field: str, value: object, reason: str, address: str | None = None):
        message = f"Validation failed for {field}={value}: {reason}"
        if address:
            message = f"[{address}] {message}"
        super().__init__(
            message,
            {"field": field, "value": value, "reason": reason, "address": address},
        )
        self.field = field
        self.value = value
        self.reason = reason
        self.address = address


class DuplicateHolderError(HolderValidationError):
    """Raised when the same address appears twice in one run."""

    def __init__(self, address: str, existing_address: str | None = None):
        reason = "address already exists"
        if existing_address and existing_address != address:
            reason += f" (as {existing_address})"
        super().__init__("address", address, reason, address=address)
        self.existing_address = existing_address or address


class HolderFileError(RewardFlowError):
    """Raised when a holder input file cannot be read or parsed."""

    def __init__(self, path: str, message: str):
        full_message = f"Cannot load holders from {path}: {message}"
        super().__init__(full_message, {"path": path})
        self.path = path


class DistributionError(RewardFlowError):
    """Raised when the weight arithmetic of a run does not produce finite shares."""

    def __init__(self, message: str, address: str | None = None):
        super().__init__(message, {"address": address})
        self.address = address
