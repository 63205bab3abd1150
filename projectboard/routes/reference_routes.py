from typing import List

from fastapi import APIRouter, Depends

from projectboard.core.exceptions import InternalErrorException
from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.deps import get_store
from projectboard.services.reference_service import get_categories, get_skills

logger = get_logger(__name__)
router = APIRouter(tags=["reference"])


@router.get("/categories", response_model=List[str])
def categories(store: KeyValueStore = Depends(get_store)):
    try:
        return get_categories(store)
    except Exception as e:
        logger.error(f"Error fetching categories: {e}", exc_info=True)
        raise InternalErrorException("Failed to fetch categories")


@router.get("/skills", response_model=List[str])
def skills(store: KeyValueStore = Depends(get_store)):
    try:
        return get_skills(store)
    except Exception as e:
        logger.error(f"Error fetching skills: {e}", exc_info=True)
        raise InternalErrorException("Failed to fetch skills")
