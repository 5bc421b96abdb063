class R6Error(Exception):
    """ Base class for all r6 errors"""
    pass


class R6PositionedError(R6Error):
    """ An error tied to a line/column in the source text"""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} (line {line}, column {column})")
        self.message = message
        self.line = line
        self.column = column


class R6LexError(R6PositionedError):
    """ Raised on an invalid character, an unexpected end of input mid-token or a read failure"""


class R6ParseError(R6PositionedError):
    """ Raised when the token stream does not form a well-formed datum"""


class R6CompileError(R6Error):
    """ Raised when a datum cannot be compiled"""


class R6UnboundSymbol(R6CompileError):
    """ Raised when an identifier is not bound in any enclosing frame"""

    def __init__(self, name: str):
        super().__init__(f"Unbound identifier: {name}")
        self.name = name


class R6SyntaxError(R6CompileError):
    """ Raised when a special form is ill-formed or a syntax keyword is used as a value"""


class R6RuntimeError(R6Error):
    """ Raised when execution of compiled code fails"""


class R6ArityError(R6RuntimeError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""


class R6TypeError(R6RuntimeError):
    """ Raised when a value of the wrong kind is called or passed to a primitive"""
