class AutomatonError(ValueError):
    """Base class for every error raised by the automaton engines."""


class SymbolOutOfRangeError(AutomatonError):
    """A symbol lies outside the supported alphabet."""

    def __init__(self, symbol, position=None):
        self.symbol = symbol
        self.position = position
        message = f"Symbol {symbol!r} is outside the alphabet"
        if position is not None:
            message += f" (position {position})"
        super().__init__(message)


class InvalidStateError(AutomatonError):
    """A state index is not valid for the automaton it was used with."""


class FrozenStateSetError(AutomatonError):
    """A frozen StateSet was mutated."""


class StateExplosionError(AutomatonError):
    """Subset construction discovered more DFA states than allowed."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Subset construction exceeded the limit of {limit} DFA states")


class InvalidDefinitionError(AutomatonError):
    """A serialized automaton definition is malformed."""
