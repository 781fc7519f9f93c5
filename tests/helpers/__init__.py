"""
Test helpers for generic handlers.

Record types shared by the handler, backend and HTTP tests, plus small
response helpers.
"""

from .records import Customer, CustomerInsert, parse_body

__all__ = [
    'Customer',
    'CustomerInsert',
    'parse_body',
]
