# errors.py - exceptions raised by the suffix index core


class InvariantError(AssertionError):
    """
    Raised when the tree is found in a state its invariants forbid.
    This is a programming-contract violation, not a recoverable error:
    user-level failures (empty word, duplicate, unknown word) are reported
    through boolean return values instead.
    """
