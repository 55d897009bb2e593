"""
Exceptions raised by the Kisan Scheme Matcher
"""


class SchemeMatcherError(Exception):
    """Base class for errors raised by this package"""


class DatasetConfigurationError(SchemeMatcherError):
    """The scheme ruleset cannot be supplied (missing, unreadable or empty workbook)"""


class ProfileStoreError(SchemeMatcherError):
    """A farmer scheme profile could not be read or written"""


class ProfileNotFoundError(ProfileStoreError):
    """No active profile exists for the given identifier"""
