"""Error kinds raised by series analysis calls."""


class AnalysisError(ValueError):
    """Base class for all analysis errors."""


class IndexOutOfRangeError(AnalysisError, IndexError):
    """Requested index or window extends outside the series."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Bar index {index} outside series of length {length}")


class InsufficientHistoryError(AnalysisError):
    """Fewer bars available than an algorithm's fixed lookback requires."""


class MissingSymbolError(AnalysisError):
    """Operation needs symbol metadata but none was supplied."""


class InvalidUnitError(AnalysisError):
    """Unrecognized conversion unit requested."""


class EmptyInputError(AnalysisError):
    """Aggregation or combination invoked on an empty collection."""
