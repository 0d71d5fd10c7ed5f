from .tree import Tree234, Order
from .iterator import TreeIterator
from .node import Entry
from .exceptions import Tree234Error, InvariantViolation, InvalidIteratorError
from .printer import format_level_order, format_debug


__all__ = [
    "Tree234",
    "Order",
    "TreeIterator",
    "Entry",
    "Tree234Error",
    "InvariantViolation",
    "InvalidIteratorError",
    "format_level_order",
    "format_debug",
]
