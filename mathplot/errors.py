################
## Exceptions ##
################

class ExpressionError(Exception):
    """Base class for everything that can go wrong while building an expression."""
    pass


class LocationalError(ExpressionError):
    """An error tied to a position in the input line."""

    def __init__(self, message: str, text: str, index: int, length: int = 1):
        self.message = message
        self.text = text
        self.index = index
        self.length = length

        msg = f'''
ERROR: {self.text}
       {self._get_error_highlight()}
{self.message}'''
        super().__init__(msg)

    def _get_error_highlight(self) -> str:
        return ' ' * self.index + '^' * self.length


class BuildError(ExpressionError):
    """Raised when a tree cannot be constructed from the given parts or tokens."""
    pass


class StackError(BuildError):
    """Raised when an RPN operator or function finds too few operands."""
    pass


class SequenceExhaustedError(ExpressionError, LookupError):
    """Raised when a point is drawn from a finished curve sequence."""
    pass
