class TSPError(Exception):
    """Fatal condition: reported on stderr, process exits with `exit_code`."""
    exit_code = 1


class UsageError(TSPError):
    pass


class FileOpenError(TSPError):
    pass


class ParseError(TSPError):
    def __init__(self, message, line_no=None):
        if line_no is not None:
            message = f'line {line_no}: {message}'
        super().__init__(message)
        self.line_no = line_no


class NameTooLong(TSPError):
    pass


class CapacityExceeded(TSPError):
    pass


class EmptyInput(TSPError):
    pass


class CostOverflow(TSPError):
    pass


class StateSpaceTooLarge(TSPError):
    pass


class ConfigError(TSPError):
    pass


class InvariantViolation(TSPError):
    pass
