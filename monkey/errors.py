class MonkeyError(Exception):
    """ Base class for all host-level Monkey errors"""
    pass

class MonkeySyntaxError(MonkeyError):
    """ Raised when a unit of source text has parse errors"""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))

class UnhandledNodeError(MonkeyError):
    """ Raised when the evaluator meets a syntax node it has no case for"""

class MacroExpansionError(MonkeyError):
    """ Raised when a macro call cannot be expanded into syntax"""

class UnquoteConversionError(MacroExpansionError):
    """ Raised when an unquoted value has no literal syntax equivalent"""
