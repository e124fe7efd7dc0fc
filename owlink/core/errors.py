"""
OWLink Error Types
Typed failures raised by the link pipelines. All are local to a single
pipeline run and propagate to the caller unchanged.
"""


class OWLinkError(ValueError):
    pass


class DomainError(OWLinkError):
    """Non-positive value passed to a logarithm or power calculation."""
    pass


class LengthMismatchError(OWLinkError):
    pass


class MalformedFrameError(OWLinkError):
    """Signal cannot be split into Manchester pairs (odd length)."""
    pass


class InvalidCodeWordError(OWLinkError):
    """A Manchester pair that is neither (0,1) nor (1,0)."""

    def __init__(self, index: int, pair: tuple):
        self.index = index
        self.pair = pair
        super().__init__(f"Invalid Manchester codeword {pair} at pair {index}")


class InvalidBitError(OWLinkError):
    """Bit sequence contains a value other than 0 or 1."""
    pass


class ParameterError(OWLinkError):
    pass
