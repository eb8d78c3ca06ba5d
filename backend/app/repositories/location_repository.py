# backend/app/repositories/location_repository.py
"""
Repository for location directory data access.

Loads locations with their organization, services, and service categories
and converts them into immutable search records. Serves as the corpus
provider for the location search engine.
"""

import logging
from typing import List, Sequence, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..core.exceptions import RepositoryException
from ..models.location import Location, Service
from ..services.search.records import (
    AddressRecord,
    LocationRecord,
    OrganizationRecord,
    ServiceRecord,
)

logger = logging.getLogger(__name__)


class LocationRepository:
    """Repository for Location queries."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def fetch_all(self) -> Sequence[LocationRecord]:
        """Load every location as a search record, ordered by id (creation order).

        Raises:
            RepositoryException: If the query fails
        """
        try:
            rows = cast(
                List[Location],
                self.db.query(Location)
                .options(
                    selectinload(Location.organization),
                    selectinload(Location.services).selectinload(Service.categories),
                )
                .order_by(Location.id)
                .all(),
            )
        except SQLAlchemyError as exc:
            logger.error("Failed to load locations: %s", exc)
            raise RepositoryException(f"Failed to load locations: {exc}") from exc

        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: Location) -> LocationRecord:
        address = None
        if any((row.street, row.city, row.state, row.postal_code)):
            address = AddressRecord(
                street=row.street,
                city=row.city,
                state=row.state,
                postal_code=row.postal_code,
            )
        services = tuple(
            ServiceRecord(
                id=service.id,
                name=service.name,
                keywords=tuple(service.keywords or ()),
                categories=tuple(category.name for category in service.categories),
                languages=tuple(service.languages or ()),
            )
            for service in row.services
        )
        return LocationRecord(
            id=row.id,
            name=row.name,
            description=row.description,
            organization=OrganizationRecord(id=row.organization.id, name=row.organization.name),
            latitude=row.latitude,
            longitude=row.longitude,
            address=address,
            admin_email=row.admin_email,
            urls=tuple(row.urls or ()),
            emails=tuple(row.emails or ()),
            phones=tuple(row.phones or ()),
            languages=tuple(row.languages or ()),
            services=services,
        )
