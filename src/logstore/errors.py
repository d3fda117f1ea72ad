"""
Exception hierarchy for the logging event store.
"""


class LogStoreError(Exception):
    """Base class for all errors raised by logstore."""


class ConfigurationError(LogStoreError):
    """Invalid settings or an unusable driver capability combination."""


class WriteError(LogStoreError):
    """
    A statement execution failed while persisting an event.

    The driver exception, when there is one, is chained as __cause__.
    """


class KeyResolutionError(LogStoreError):
    """The identifier of the freshly inserted event row could not be obtained."""


class SoftIntegrityWarning(UserWarning):
    """
    The parent insert reported an affected-row count other than 1.

    Non-fatal: reported on the diagnostic channel (the logstore logger)
    unless the row-count policy is set to abort.
    """

    def __init__(self, update_count: int):
        self.update_count = update_count
        super().__init__(
            f"Failed to insert logging event: expected 1 affected row, got {update_count}"
        )
