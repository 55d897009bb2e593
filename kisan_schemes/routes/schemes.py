"""
API routes for scheme search and saved farmer profiles
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from ..exceptions import DatasetConfigurationError, ProfileNotFoundError, ProfileStoreError
from ..models.profile import (
    SearchResponse,
    SearchWithSaveRequest,
    SearchWithSaveResponse,
    SetDefaultRequest
)
from ..services.dataset_service import DatasetService, dataset_service
from ..services.eligibility_service import EligibilityService, eligibility_service
from ..services.profile_service import ProfileService, profile_service
from ..utils.validators import validate_farmer_input

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/schemes", tags=["schemes"])


def get_dataset_service() -> DatasetService:
    return dataset_service


def get_eligibility_service() -> EligibilityService:
    return eligibility_service


def get_profile_service() -> ProfileService:
    return profile_service


@router.get("/headers")
async def get_headers(datasets: DatasetService = Depends(get_dataset_service)):
    """
    Get the ruleset columns and the answer keys they match on
    """
    try:
        headers = await run_in_threadpool(datasets.get_headers)
        return {"headers": headers}
    except DatasetConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error reading scheme headers: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/search", response_model=SearchResponse)
async def search_schemes(
    farmer_input: Dict[str, Any] = Body(...),
    datasets: DatasetService = Depends(get_dataset_service),
    eligibility: EligibilityService = Depends(get_eligibility_service)
):
    """
    Find the schemes a farmer is eligible for
    """
    try:
        validation_errors = validate_farmer_input(farmer_input)
        if validation_errors:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid farmer input: {'; '.join(validation_errors)}"
            )

        rows = await run_in_threadpool(datasets.load_rows)
        result_set = eligibility.search(farmer_input, rows)

        return SearchResponse(
            eligible=result_set.eligible,
            count=result_set.count,
            searched_at=result_set.searched_at
        )

    except HTTPException:
        raise
    except DatasetConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error searching schemes: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/search-with-save", response_model=SearchWithSaveResponse)
async def search_schemes_with_save(
    request: SearchWithSaveRequest,
    datasets: DatasetService = Depends(get_dataset_service),
    eligibility: EligibilityService = Depends(get_eligibility_service),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Find eligible schemes and optionally save the answers as a named profile
    """
    try:
        rows = await run_in_threadpool(datasets.load_rows)
        return await eligibility.search_and_save(request, rows, profile_store=profiles)

    except DatasetConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error in search with save: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/profile")
async def get_profiles(
    user_id: str = Query(..., min_length=1, description="Owner of the profiles"),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Get a user's saved scheme profiles
    """
    try:
        user_profiles = await profiles.list_profiles(user_id)
        return {"profiles": user_profiles, "total": len(user_profiles)}
    except ProfileStoreError as e:
        logger.error(f"Error loading profiles for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to load profiles: {str(e)}")


@router.delete("/profile")
async def delete_profile(
    profile_id: str = Query(..., min_length=1, description="Profile to delete"),
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Delete a saved scheme profile
    """
    try:
        await profiles.delete_profile(profile_id)
        return {"success": True, "message": "Profile deleted"}
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProfileStoreError as e:
        logger.error(f"Error deleting profile {profile_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete profile: {str(e)}")


@router.patch("/profile")
async def set_default_profile(
    request: SetDefaultRequest,
    profiles: ProfileService = Depends(get_profile_service)
):
    """
    Mark a saved profile as the user's default
    """
    if not request.is_default:
        raise HTTPException(status_code=400, detail="Only setting a default profile is supported")

    try:
        profile = await profiles.set_default(request.profile_id)
        return {"success": True, "profile": profile}
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProfileStoreError as e:
        logger.error(f"Error setting default profile {request.profile_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to set default profile: {str(e)}")
