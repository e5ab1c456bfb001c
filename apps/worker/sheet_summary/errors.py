class SummaryError(Exception):
    """Base class for every failure raised by the summary worker."""


class ConfigError(SummaryError, RuntimeError):
    pass


class PayloadError(SummaryError, ValueError):
    pass


class PlanningError(SummaryError):
    pass


class TabCreationError(SummaryError):
    pass


class TabNotFoundError(SummaryError, LookupError):
    def __init__(self, title: str, reason: str = "not found"):
        super().__init__(f"Tab {title!r} {reason}")
        self.title = title


class ResizeError(SummaryError):
    pass


class ProvisioningError(SummaryError):
    """Destination tab could not be resolved or grown; no write may follow."""

    def __init__(self, destination: str, reason: str):
        super().__init__(f"Unable to add columns and rows to {destination!r}: {reason}")
        self.destination = destination


class ReadError(SummaryError):
    pass


class WriteError(SummaryError):
    pass
