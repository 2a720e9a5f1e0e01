"""
Custom exceptions
"""


class StorefrontError(Exception):
    """Base exception"""
    pass


class CurrencyLookupError(StorefrontError, LookupError):
    """Unknown currency or currency pair"""
    pass


class FormatError(StorefrontError):
    """Issues formatting output"""
    pass


class ItemNotFoundError(StorefrontError, KeyError):
    """No inventory item with the requested id"""
    pass