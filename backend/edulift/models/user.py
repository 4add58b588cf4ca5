"""
User model for the EduLift users collection.

The enums below are the vocabularies shared with the storage-level validator
in edulift.database.databases.edulift_db.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRole(str, Enum):
    """Roles a user can hold."""
    STUDENT = "student"
    MENTOR = "mentor"
    COUNSELOR = "counselor"
    ADMIN = "admin"


class RiskFlag(str, Enum):
    """Safeguarding risk indicators."""
    ACADEMIC = "academic_risk"
    BEHAVIORAL = "behavioral_risk"
    ATTENDANCE = "attendance_risk"
    EMOTIONAL = "emotional_risk"
    SUBSTANCE = "substance_risk"
    FAMILY = "family_risk"
    FINANCIAL = "financial_risk"
    HEALTH = "health_risk"
    SOCIAL = "social_risk"
    HOUSING = "housing_risk"


class Language(str, Enum):
    """Supported interface languages."""
    EN = "en"
    ES = "es"
    FR = "fr"
    DE = "de"
    IT = "it"
    PT = "pt"
    ZH = "zh"
    JA = "ja"
    KO = "ko"
    AR = "ar"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Return the stored string values of an enum, in declaration order."""
    return [member.value for member in enum_cls]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Unknown keys are kept at every level, matching the permissive validator.
_DOCUMENT_CONFIG = ConfigDict(
    populate_by_name=True,
    use_enum_values=True,
    validate_default=True,
    extra="allow",
)


class Profile(BaseModel):
    """Personal details embedded in a user document."""
    model_config = _DOCUMENT_CONFIG

    first_name: Optional[str] = Field(None, alias="firstName", max_length=50)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=50)
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    address: Optional[str] = Field(None, max_length=200)
    emergency_contact: Optional[str] = Field(None, alias="emergencyContact", max_length=100)
    emergency_phone_number: Optional[str] = Field(None, alias="emergencyPhoneNumber")
    additional_info: Optional[dict[str, Any]] = Field(None, alias="additionalInfo")


class ConsentFlags(BaseModel):
    """Consent given by (or on behalf of) the user."""
    model_config = _DOCUMENT_CONFIG

    data_processing_consent: Optional[bool] = Field(None, alias="dataProcessingConsent")
    communication_consent: Optional[bool] = Field(None, alias="communicationConsent")
    emergency_contact_consent: Optional[bool] = Field(None, alias="emergencyContactConsent")
    photo_video_consent: Optional[bool] = Field(None, alias="photoVideoConsent")
    consent_timestamp: Optional[datetime] = Field(None, alias="consentTimestamp")


class Preferences(BaseModel):
    """Notification and locale preferences."""
    model_config = _DOCUMENT_CONFIG

    language: Optional[Language] = Language.EN
    timezone: Optional[str] = Field("UTC", max_length=50)
    email_notifications: Optional[bool] = Field(True, alias="emailNotifications")
    sms_notifications: Optional[bool] = Field(False, alias="smsNotifications")
    push_notifications: Optional[bool] = Field(True, alias="pushNotifications")
    custom_preferences: Optional[dict[str, Any]] = Field(None, alias="customPreferences")


class User(BaseModel):
    """
    User document model for the EduLift users collection.

    Required on write: roles, email, createdAt. The top-level username,
    firstName and lastName fields are legacy and are not reconciled with
    the profile block.
    """
    model_config = _DOCUMENT_CONFIG

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    roles: list[UserRole] = Field(..., min_length=1, description="Roles held by the user")
    group_home_id: Optional[str] = Field(
        None,
        alias="groupHomeId",
        min_length=1,
        max_length=100,
        description="Group home the user belongs to",
    )
    profile: Optional[Profile] = None
    consent_flags: Optional[ConsentFlags] = Field(None, alias="consentFlags")
    preferences: Optional[Preferences] = Field(default_factory=Preferences)
    risk_flags: Optional[list[RiskFlag]] = Field(None, alias="riskFlags")
    email: str = Field(..., max_length=255, description="Unique email address")
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: Optional[datetime] = Field(default_factory=_utcnow, alias="updatedAt")

    # Legacy fields
    username: Optional[str] = Field(None, max_length=50)
    first_name: Optional[str] = Field(None, alias="firstName", max_length=50)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=50)

    @field_validator("roles")
    @classmethod
    def roles_must_be_unique(cls, roles: list) -> list:
        if len(set(roles)) != len(roles):
            raise ValueError("roles must not contain duplicates")
        return roles

    def to_document(self) -> dict[str, Any]:
        """Serialize to the document shape stored in MongoDB."""
        return self.model_dump(by_alias=True, exclude_none=True)


def example_user() -> User:
    """A valid sample user, shown after the collection is provisioned."""
    now = datetime.now(timezone.utc)
    return User(
        roles=[UserRole.STUDENT],
        group_home_id="gh_001",
        profile=Profile(first_name="Jane", last_name="Doe", phone_number="+1234567890"),
        consent_flags=ConsentFlags(
            data_processing_consent=True,
            communication_consent=True,
            consent_timestamp=now,
        ),
        preferences=Preferences(),
        risk_flags=[RiskFlag.ACADEMIC],
        email="jane.doe@example.com",
        created_at=now,
        updated_at=now,
    )
