"""Error types raised by the signalflow engines."""


class SignalflowError(Exception):
    """Base class for signalflow errors."""
    pass


class InputValidationError(SignalflowError, ValueError):
    """Operator-entered value is non-numeric or out of range."""
    pass


class MissingEndpointError(SignalflowError):
    """Source or sink has not been chosen yet."""
    pass


class InvalidEndpointError(SignalflowError, KeyError):
    """Source or sink does not name a node of the graph."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class GraphLoadError(SignalflowError):
    """Error reading a saved graph snapshot."""
    pass


class GraphSaveError(SignalflowError):
    """Error writing a graph snapshot."""
    pass
