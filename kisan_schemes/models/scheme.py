"""
Pydantic models for the scheme ruleset and eligibility results
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class HeaderField(BaseModel):
    """A ruleset column label and the answer key it joins on"""
    label: str = Field(..., description="Column label as written in the ruleset")
    key: str = Field(..., description="Normalized key farmers answer under")


class EligibleScheme(BaseModel):
    """A scheme row that passed every cell predicate"""
    name: str = Field(..., description="Value of the scheme name column")
    link: Optional[str] = Field(None, description="Value of the scheme link column, if any")
    raw: Dict[str, Any] = Field(default_factory=dict, description="The full ruleset row")


class EligibilityResultSet(BaseModel):
    """Outcome of one matching pass over the ruleset"""
    eligible: List[EligibleScheme] = Field(default_factory=list, description="Passing rows in ruleset order")
    count: int = Field(0, ge=0, description="Number of eligible schemes")
    searched_at: datetime = Field(default_factory=get_current_utc_time)

    def to_document(self) -> Dict[str, Any]:
        """Shape stored in a profile's search history"""
        return {
            "eligible_schemes": [scheme.model_dump() for scheme in self.eligible],
            "count": self.count,
            "searched_at": self.searched_at
        }

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "eligible": [
                    {
                        "name": "PM-KISAN",
                        "link": "https://pmkisan.gov.in",
                        "raw": {
                            "Scheme Name": "PM-KISAN",
                            "Scheme Link": "https://pmkisan.gov.in",
                            "Land Size": "<=2",
                            "Farmer Category": "small,marginal"
                        }
                    }
                ],
                "count": 1,
                "searched_at": "2024-01-15T10:30:00Z"
            }
        }
    )
