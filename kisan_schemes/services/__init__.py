"""
Services package for the Kisan Scheme Matcher
"""

from .dataset_service import DatasetService
from .eligibility_service import EligibilityService
from .profile_service import ProfileService

__all__ = [
    "DatasetService",
    "EligibilityService",
    "ProfileService"
]
