"""Company and company location models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from company_review.db.base import Base


class Company(Base):
    """Employer organization registered on the platform."""

    __tablename__ = "companies"

    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)
    logo = Column(String(500))
    website = Column(String(500))

    # Metadata
    industry = Column(String(100), nullable=False, index=True)
    size = Column(String(50), nullable=False)  # 1-10, 11-50, 51-200, ...
    founded_year = Column(Integer)

    # Owner lives in the account service; we keep a reference and a display copy
    owner_id = Column(UUID(as_uuid=True), index=True)
    owner_name = Column(String(255))
    owner_email = Column(String(255))

    # Verification - the only column this service mutates
    is_verified = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    locations = relationship(
        "CompanyLocation",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="CompanyLocation.position",
        lazy="selectin",
    )
    documents = relationship(
        "CompanyDocument",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="CompanyDocument.uploaded_at",
    )

    def __repr__(self):
        return f"<Company {self.name} (verified={self.is_verified})>"


class CompanyLocation(Base):
    """Address record; position 0 is the primary location."""

    __tablename__ = "company_locations"

    company_id = Column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, default=0, nullable=False)

    address = Column(String(500))
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100))
    country = Column(String(100), nullable=False, index=True)
    zip_code = Column(String(20))
    is_headquarters = Column(Boolean, default=False, nullable=False)

    company = relationship("Company", back_populates="locations")

    def __repr__(self):
        return f"<CompanyLocation {self.city}, {self.country}>"
