class Tree234Error(Exception):
    "Base error for tree234"


class InvariantViolation(Tree234Error):
    """The tree structure has been found to be inconsistent.

    This always indicates a defect in the balancing logic, it is never
    raised for normal conditions such as a missing key.
    """


class InvalidIteratorError(Tree234Error):
    """Trying to dereference an iterator that has no current entry."""
