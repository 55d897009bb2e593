"""
Models package for the Kisan Scheme Matcher
"""

from .scheme import (
    HeaderField,
    EligibleScheme,
    EligibilityResultSet
)

from .profile import (
    SearchWithSaveRequest,
    SearchResponse,
    SearchWithSaveResponse,
    SavedProfileSummary,
    FarmerSchemeProfile,
    SetDefaultRequest
)

__all__ = [
    # Ruleset models
    "HeaderField",
    "EligibleScheme",
    "EligibilityResultSet",

    # Search and profile models
    "SearchWithSaveRequest",
    "SearchResponse",
    "SearchWithSaveResponse",
    "SavedProfileSummary",
    "FarmerSchemeProfile",
    "SetDefaultRequest"
]
