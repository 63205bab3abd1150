# projectboard/services/reference_service.py
from typing import List

from projectboard.core.logging_config import get_logger
from projectboard.core.store import KeyValueStore
from projectboard.services.admin_service import ADMIN_REQUESTS_KEY, ADMIN_USERS_KEY

logger = get_logger(__name__)

CATEGORIES_KEY = "categories"
SKILLS_KEY = "skills"

DEFAULT_CATEGORIES = [
    "Design", "Development", "Marketing", "Video", "Social Media",
    "Game Art / 3D", "Game Design", "VR Development", "Brand Design",
    "Content Design", "Art Design", "Media/DTP",
]

DEFAULT_SKILLS = [
    "Photoshop", "Illustrator", "InDesign", "After Effects", "Premiere Pro",
    "JavaScript", "React", "HTML/CSS", "Python", "Java", "C++", "Unity",
    "Blender", "Maya", "3ds Max", "Figma", "Sketch", "XD", "Cinema 4D",
    "Social Media Strategy", "Content Creation", "SEO", "Google Analytics",
    "Brand Strategy", "Typography", "UI/UX Design", "Web Design", "Print Design",
    "Video Editing", "Motion Graphics", "Animation", "Sound Design",
    "Game Programming", "Level Design", "Character Design", "Environment Art",
    "VR Development", "AR Development", "Unreal Engine",
]


def get_categories(store: KeyValueStore) -> List[str]:
    return store.get(CATEGORIES_KEY) or []


def get_skills(store: KeyValueStore) -> List[str]:
    return store.get(SKILLS_KEY) or []


def seed_reference_data(store: KeyValueStore) -> None:
    """Write the default lists and empty admin collections where keys are missing."""
    defaults = {
        CATEGORIES_KEY: DEFAULT_CATEGORIES,
        SKILLS_KEY: DEFAULT_SKILLS,
        ADMIN_USERS_KEY: [],
        ADMIN_REQUESTS_KEY: [],
    }
    for key, value in defaults.items():
        seeded = store.update(key, lambda current, value=value: list(value) if current is None else current)
        logger.debug("Reference key %s ready (%d entries)", key, len(seeded))
