"""
Core utility functions.
"""

from .crypto import (
    encrypt,
    decrypt,
    is_encrypted,
    EncryptionError,
)
from .pagination import parse_pagination, paginate

__all__ = [
    'encrypt',
    'decrypt',
    'is_encrypted',
    'EncryptionError',
    'parse_pagination',
    'paginate',
]
