# backend/app/models/location.py
"""
Location directory models.

This module defines the read model searched by the directory API:
1. Organization - The agency operating one or more locations
2. Location - A physical site where services are offered
3. Service - A program offered at a location, tagged with keywords and categories
4. Category - Taxonomy entries (e.g. "Food", "Jobs") linked to services
"""

from __future__ import annotations

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from ..database import Base

service_categories = Table(
    "service_categories",
    Base.metadata,
    Column("service_id", Integer, ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "category_id", Integer, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    ),
)


class Organization(Base):
    """
    Model representing an organization.

    Attributes:
        id: Primary key
        name: Display name searched by keyword and org_name filters
    """

    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)

    locations = relationship("Location", back_populates="organization")

    def __repr__(self) -> str:
        return f"<Organization {self.name}>"


class Location(Base):
    """
    Model representing a location.

    Attributes:
        id: Primary key; ascending ids reflect creation order
        organization_id: Owning organization
        name, description: Free text searched by keyword
        latitude, longitude: Geocoded coordinates (nullable until geocoded)
        street, city, state, postal_code: Postal address (all nullable)
        admin_email: Address of the location administrator
        urls, emails, phones, languages: JSON lists
    """

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String(2), nullable=True)
    postal_code = Column(String(10), nullable=True)
    admin_email = Column(String, nullable=True)
    urls = Column(JSON, nullable=False, default=list)
    emails = Column(JSON, nullable=False, default=list)
    phones = Column(JSON, nullable=False, default=list)
    languages = Column(JSON, nullable=False, default=list)

    organization = relationship("Organization", back_populates="locations")
    services = relationship(
        "Service",
        back_populates="location",
        order_by="Service.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Location {self.id} {self.name}>"


class Service(Base):
    """Model representing a service offered at exactly one location."""

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(
        Integer, ForeignKey("locations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    keywords = Column(JSON, nullable=False, default=list)
    languages = Column(JSON, nullable=False, default=list)

    location = relationship("Location", back_populates="services")
    categories = relationship("Category", secondary=service_categories, order_by="Category.id")

    def __repr__(self) -> str:
        return f"<Service {self.name}>"


class Category(Base):
    """Model representing a service category."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Category {self.name}>"
