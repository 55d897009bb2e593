"""
Eligibility service for matching farmer answers against scheme rows
"""
import logging
import re
from typing import Any, Iterable, Mapping, Optional

from ..cell_matcher import CellMatcher
from ..exceptions import ProfileStoreError
from ..models.profile import SearchWithSaveRequest, SearchWithSaveResponse
from ..models.scheme import EligibleScheme, EligibilityResultSet
from ..utils.normalizers import is_blank, normalize_farmer_input, normalize_key

logger = logging.getLogger(__name__)

SCHEME_NAME_HEADER = re.compile(r'scheme name', re.IGNORECASE)
SCHEME_LINK_HEADER = re.compile(r'scheme link', re.IGNORECASE)
UNNAMED_SCHEME = "Unnamed Scheme"


class EligibilityService:
    """Service for checking farmer answers against the scheme ruleset"""

    def __init__(self, matcher: CellMatcher = None):
        self.matcher = matcher or CellMatcher()

    @staticmethod
    def is_identifying_column(label: str) -> bool:
        """Scheme name and link columns describe the row, they never constrain it"""
        return bool(SCHEME_NAME_HEADER.search(label) or SCHEME_LINK_HEADER.search(label))

    def is_row_eligible(self, row: Mapping[str, Any], normalized_input: Mapping[str, Any]) -> bool:
        """
        Check one scheme row against normalized answers

        Args:
            row: Column label -> raw cell value
            normalized_input: Answers keyed by normalized field name

        Returns:
            True if every constraining cell passes; stops at the first failure
        """
        for label, cell in row.items():
            if self.is_identifying_column(label):
                continue
            if cell is None or cell == "":
                continue

            answer = normalized_input.get(normalize_key(label))
            if not self.matcher.match_cell(cell, answer, label):
                logger.debug(f"Column '{label}' rejected answer {answer!r} against {cell!r}")
                return False
        return True

    @staticmethod
    def build_eligible_scheme(row: Mapping[str, Any]) -> EligibleScheme:
        """Build the compact result (name + link + raw row) for a passing row"""
        labels = list(row.keys())
        name_label = next((label for label in labels if SCHEME_NAME_HEADER.search(label)), None)
        if name_label is None and labels:
            name_label = labels[0]
        link_label = next((label for label in labels if SCHEME_LINK_HEADER.search(label)), None)

        name = row.get(name_label) if name_label is not None else None
        link = row.get(link_label) if link_label is not None else None

        return EligibleScheme(
            name=UNNAMED_SCHEME if is_blank(name) else str(name),
            link=None if is_blank(link) else str(link),
            raw=dict(row)
        )

    def search(self, farmer_input: Mapping[str, Any], rows: Iterable[Mapping[str, Any]]) -> EligibilityResultSet:
        """
        Find every scheme row the farmer is eligible for

        Args:
            farmer_input: Raw field name -> answer mapping
            rows: Scheme rows in ruleset order

        Returns:
            EligibilityResultSet with passing rows in ruleset order
        """
        normalized_input = normalize_farmer_input(farmer_input)

        eligible = [
            self.build_eligible_scheme(row)
            for row in rows
            if self.is_row_eligible(row, normalized_input)
        ]

        logger.info(f"Eligibility search completed: {len(eligible)} schemes eligible")
        return EligibilityResultSet(eligible=eligible, count=len(eligible))

    async def search_and_save(
        self,
        request: SearchWithSaveRequest,
        rows: Iterable[Mapping[str, Any]],
        profile_store: Optional[Any] = None
    ) -> SearchWithSaveResponse:
        """
        Search, then store the answers and results as a named profile if asked

        A failed save is reported on the response; the results are always returned.

        Args:
            request: Answers plus the optional save instructions
            rows: Scheme rows in ruleset order
            profile_store: Store with an async save(user_id, profile_name, farmer_input, result_set)

        Returns:
            SearchWithSaveResponse
        """
        result_set = self.search(request.farmer_input, rows)
        response = SearchWithSaveResponse(
            eligible=result_set.eligible,
            count=result_set.count,
            search_results=result_set
        )

        if not request.wants_save() or profile_store is None:
            return response

        try:
            response.saved_profile = await profile_store.save(
                user_id=request.user_id,
                profile_name=request.profile_name,
                farmer_input=request.farmer_input,
                result_set=result_set
            )
        except ProfileStoreError as e:
            logger.warning(f"Error saving profile '{request.profile_name}' for {request.user_id}: {e}")
            response.profile_save_error = f"Failed to save profile: {e}"

        return response


# Global eligibility service instance
eligibility_service = EligibilityService()
