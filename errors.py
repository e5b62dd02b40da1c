# errors.py


class SimulatorError(Exception):
    """Base class for everything the simulator reports back to the user."""


class ConfigError(SimulatorError, ValueError):
    """Bad cache geometry or unreadable cache configuration file."""


class ParseError(SimulatorError, ValueError):
    """Input that cannot be turned into a well-formed address or access."""


class TraceParseError(ParseError):
    """
    Malformed trace record.
    Carries the trace file name and 1-based line number when known.
    """

    def __init__(self, message, path=None, line_number=None):
        self.path = path
        self.line_number = line_number
        if path is not None and line_number is not None:
            message = f"{path}:{line_number}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
