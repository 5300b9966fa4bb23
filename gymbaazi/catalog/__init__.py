"""Exercise catalog sources for GymBaazi.

Each source implements the ExerciseCatalog ABC and handles:
- Fetching paginated exercise lists, details and taxonomy lists
- Normalizing provider JSON into CatalogExercise / CatalogPage
- Rate limiting and TTL caching of responses

Available sources:
    ExerciseDBClient: ExerciseDB API v1 (no authentication)
"""

from gymbaazi.catalog.base import CatalogExercise, CatalogPage, ExerciseCatalog, PageMetadata
from gymbaazi.catalog.exercisedb import ExerciseDBClient

__all__ = [
    "ExerciseCatalog",
    "CatalogExercise",
    "CatalogPage",
    "PageMetadata",
    "ExerciseDBClient",
    "CATALOG_REGISTRY",
    "get_catalog",
]

# Registry: source_id → catalog class
CATALOG_REGISTRY: dict[str, type[ExerciseCatalog]] = {
    "exercisedb": ExerciseDBClient,
}


def get_catalog(source_id: str) -> type[ExerciseCatalog]:
    """Return the catalog class for a source slug.

    Raises:
        KeyError: If the source_id is not registered.
    """
    if source_id not in CATALOG_REGISTRY:
        raise KeyError(
            f"No catalog registered for source '{source_id}'. "
            f"Available: {list(CATALOG_REGISTRY)}"
        )
    return CATALOG_REGISTRY[source_id]
