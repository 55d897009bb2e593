"""
Pydantic models for search requests and saved farmer scheme profiles
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .scheme import EligibleScheme, EligibilityResultSet, get_current_utc_time

Answer = Optional[Union[str, int, float, bool]]


class SearchWithSaveRequest(BaseModel):
    """Search request that may also store the answers as a named profile"""
    farmer_input: Dict[str, Answer] = Field(..., description="Questionnaire answers keyed by field name")
    save_profile: bool = Field(False, description="Whether to save the answers and results")
    profile_name: Optional[str] = Field(None, description="Name to save the profile under")
    user_id: Optional[str] = Field(None, description="Owner of the profile")

    @field_validator('profile_name')
    @classmethod
    def strip_profile_name(cls, v):
        if v is not None:
            return v.strip()
        return v

    def wants_save(self) -> bool:
        """Saving needs the flag, a non-blank name and an owner"""
        return bool(self.save_profile and self.profile_name and self.user_id)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "farmer_input": {
                    "Land Size": "1.5",
                    "Farmer Category": "Small",
                    "Location State": "Karnataka",
                    "Irrigation Type": "Drip"
                },
                "save_profile": True,
                "profile_name": "Kharif 2024",
                "user_id": "652f1c2e9b1e8a5d4c3b2a10"
            }
        }
    )


class SavedProfileSummary(BaseModel):
    """Short confirmation returned after a profile save"""
    id: str = Field(..., description="Profile identifier")
    profile_name: str
    is_default: bool = False
    updated_at: datetime = Field(default_factory=get_current_utc_time)


class SearchResponse(BaseModel):
    """Result of a plain search"""
    eligible: List[EligibleScheme] = Field(default_factory=list)
    count: int = 0
    searched_at: datetime = Field(default_factory=get_current_utc_time)


class SearchWithSaveResponse(BaseModel):
    """Result of a search, plus what happened to the optional profile save"""
    eligible: List[EligibleScheme] = Field(default_factory=list)
    count: int = 0
    search_results: EligibilityResultSet
    saved_profile: Optional[SavedProfileSummary] = None
    profile_save_error: Optional[str] = Field(None, description="Set when the results could not be saved")


class FarmerSchemeProfile(BaseModel):
    """Saved questionnaire answers with their search history"""
    id: str = Field(..., description="Profile identifier")
    user_id: str
    profile_name: str
    profile_data: Dict[str, Any] = Field(default_factory=dict)
    search_results: List[Dict[str, Any]] = Field(default_factory=list)
    is_active: bool = True
    is_default: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SetDefaultRequest(BaseModel):
    """Mark a profile as the user's default"""
    profile_id: str = Field(..., description="Profile identifier")
    is_default: bool = Field(True, description="Only True is supported")
