"""Repository-level dependency providers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...repositories.location_repository import LocationRepository
from .database import get_db


def get_location_repo(db: Session = Depends(get_db)) -> LocationRepository:
    """Provide a LocationRepository instance."""

    return LocationRepository(db)
