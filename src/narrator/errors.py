"""Errors surfaced to callers of the narration engine."""


class NarratorError(Exception):
    """Base class for narration engine errors."""


class UpstreamFormatError(NarratorError):
    """The generation service returned nothing that could be segmented."""


class ContractViolation(NarratorError):
    """An engine invariant was about to be broken by the caller's input."""


class UpstreamCountMismatch(NarratorError):
    """A multi-variant response carried the wrong number of labeled scripts.

    Retryable: the caller may simply re-request.
    """

    retryable = True

    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"Expected {expected} scripts but got {found}. Please try again."
        )
