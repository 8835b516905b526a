# Database Models for the Experience-Group Campaign Marketplace

from sqlalchemy import (
    Column, String, Integer, Date, DateTime, ForeignKey, Text, JSON, Enum, Boolean,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime, timezone
import uuid
import enum

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


# Enums
class UserRoleDB(str, enum.Enum):
    ADVERTISER = "advertiser"
    INFLUENCER = "influencer"


class CampaignStatusDB(str, enum.Enum):
    RECRUITING = "recruiting"
    CLOSED = "closed"
    SELECTED = "selected"
    COMPLETED = "completed"


class ApplicationStatusDB(str, enum.Enum):
    PENDING = "pending"
    SELECTED = "selected"
    REJECTED = "rejected"


# ============================================================================
# IDENTITY PROVIDER STORE
# ============================================================================

class AuthIdentity(Base):
    """Credential record owned by the identity provider adapter."""
    __tablename__ = "auth_identities"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    user_metadata = Column(JSON)  # name, phone, role, redirect url
    last_sign_in_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow)


# ============================================================================
# PROFILES
# ============================================================================

class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True)  # same id as the identity record
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(
        Enum(UserRoleDB, values_callable=_enum_values, name="userroledb"),
        nullable=False
    )
    terms_agreed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    advertiser_profile = relationship(
        "AdvertiserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    influencer_profile = relationship(
        "InfluencerProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    campaigns = relationship("Campaign", back_populates="advertiser")
    applications = relationship("Application", back_populates="influencer")


class AdvertiserProfile(Base):
    """1:1 extension of an advertiser user."""
    __tablename__ = "advertiser_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    business_name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    business_registration_number = Column(String(12), nullable=False)  # NNN-NN-NNNNN
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("UserProfile", back_populates="advertiser_profile")


class InfluencerProfile(Base):
    """1:1 extension of an influencer user."""
    __tablename__ = "influencer_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), unique=True, nullable=False)
    birth_date = Column(Date, nullable=False)

    # Social channels
    naver_blog_name = Column(String(100))
    naver_blog_url = Column(String(500))
    youtube_name = Column(String(100))
    youtube_url = Column(String(500))
    instagram_name = Column(String(100))
    instagram_url = Column(String(500))
    threads_name = Column(String(100))
    threads_url = Column(String(500))

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("UserProfile", back_populates="influencer_profile")


# ============================================================================
# CAMPAIGNS & APPLICATIONS
# ============================================================================

class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    advertiser_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    recruitment_start_date = Column(Date, nullable=False)
    recruitment_end_date = Column(Date, nullable=False)
    recruitment_count = Column(Integer, nullable=False)
    benefits = Column(Text, nullable=False)
    store_info = Column(Text, nullable=False)
    mission = Column(Text, nullable=False)
    status = Column(
        Enum(CampaignStatusDB, values_callable=_enum_values, name="campaignstatusdb"),
        nullable=False,
        default=CampaignStatusDB.RECRUITING,
        index=True
    )
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    advertiser = relationship("UserProfile", back_populates="campaigns")
    applications = relationship("Application", back_populates="campaign")


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("campaign_id", "influencer_id", name="uq_applications_campaign_influencer"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    campaign_id = Column(String(36), ForeignKey("campaigns.id"), nullable=False, index=True)
    influencer_id = Column(String(36), ForeignKey("user_profiles.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    visit_date = Column(Date, nullable=False)
    status = Column(
        Enum(ApplicationStatusDB, values_callable=_enum_values, name="applicationstatusdb"),
        nullable=False,
        default=ApplicationStatusDB.PENDING,
        index=True
    )
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    campaign = relationship("Campaign", back_populates="applications")
    influencer = relationship("UserProfile", back_populates="applications")
