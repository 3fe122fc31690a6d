from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Fixed enumeration; order matters for keyword reclassification
SPECIALTIES = ("auto", "vida", "residencial", "empresarial", "saude", "viagem")


class Base(DeclarativeBase):
    pass


class Provider(Base):
    __tablename__ = "insurance_brokers"
    __table_args__ = (
        Index("idx_brokers_neighborhood", "neighborhood"),
        Index("idx_brokers_specialties", "specialties", postgresql_using="gin"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    neighborhood: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    specialties: Mapped[Optional[list[str]]] = mapped_column(ARRAY(Text), nullable=True)
    rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    review_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    social_media: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True)
    business_hours: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True)
    license_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    years_experience: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    company_size: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    source_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), server_default=text("NOW()"))
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), server_default=text("NOW()"))


Index("idx_brokers_rating", Provider.rating.desc())
