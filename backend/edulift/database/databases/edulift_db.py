"""
EduLift database configuration.
Stores user identity, profile, consent and safeguarding data.

Structure:
- users: one document per user, validated by USERS_VALIDATION_RULE
"""
from edulift.database.rules import FieldRule, IndexSpec, ValidationRule
from edulift.models.user import Language, RiskFlag, UserRole, enum_values

DB_NAME = "edulift"


def _string(description: str | None = None, **constraints) -> FieldRule:
    return FieldRule(bson_type="string", description=description, **constraints)


def _bool() -> FieldRule:
    return FieldRule(bson_type="bool")


def _date(description: str | None = None) -> FieldRule:
    return FieldRule(bson_type="date", description=description)


def _object(description: str | None = None, **properties: FieldRule) -> FieldRule:
    return FieldRule(bson_type="object", description=description, properties=properties)


USERS_VALIDATION_RULE = ValidationRule(
    json_schema=FieldRule(
        bson_type="object",
        title="User Schema Validation",
        required=["roles", "email", "createdAt"],
        properties={
            "_id": FieldRule(bson_type="objectId", description="Unique identifier for the user"),
            "roles": FieldRule(
                bson_type="array",
                description="User roles - required field",
                min_items=1,
                unique_items=True,
                items=_string(enum=enum_values(UserRole)),
            ),
            "groupHomeId": _string(
                "Group home identifier - indexed field", min_length=1, max_length=100
            ),
            "profile": _object(
                "User profile information",
                firstName=_string(max_length=50),
                lastName=_string(max_length=50),
                phoneNumber=_string(),
                dateOfBirth=_string(),
                address=_string(max_length=200),
                emergencyContact=_string(max_length=100),
                emergencyPhoneNumber=_string(),
                additionalInfo=FieldRule(bson_type="object"),
            ),
            "consentFlags": _object(
                "User consent information",
                dataProcessingConsent=_bool(),
                communicationConsent=_bool(),
                emergencyContactConsent=_bool(),
                photoVideoConsent=_bool(),
                consentTimestamp=_date(),
            ),
            "preferences": _object(
                "User preferences",
                language=_string(enum=enum_values(Language)),
                timezone=_string(max_length=50),
                emailNotifications=_bool(),
                smsNotifications=_bool(),
                pushNotifications=_bool(),
                customPreferences=FieldRule(bson_type="object"),
            ),
            "riskFlags": FieldRule(
                bson_type="array",
                description="Array of risk indicators",
                items=_string(enum=enum_values(RiskFlag)),
            ),
            "createdAt": _date("User creation timestamp - required field"),
            "email": _string("User email - unique indexed field", max_length=255),
            "username": _string("Legacy field - username", max_length=50),
            "firstName": _string("Legacy field - first name", max_length=50),
            "lastName": _string("Legacy field - last name", max_length=50),
            "updatedAt": _date("Last update timestamp"),
        },
    ),
    validation_level="strict",
    validation_action="error",
)


class Collections:
    """Collection names in the EduLift database."""
    USERS = "users"

    VALIDATORS = {
        "users": USERS_VALIDATION_RULE,
    }

    # Created in order; names are part of the contract
    INDEXES = {
        "users": [
            IndexSpec(name="email_unique_index", keys=[("email", 1)], unique=True, sparse=True),
            IndexSpec(name="groupHomeId_index", keys=[("groupHomeId", 1)]),
            IndexSpec(name="roles_index", keys=[("roles", 1)]),
            IndexSpec(
                name="roles_groupHomeId_compound_index",
                keys=[("roles", 1), ("groupHomeId", 1)],
            ),
            IndexSpec(name="createdAt_desc_index", keys=[("createdAt", -1)]),
            IndexSpec(name="riskFlags_index", keys=[("riskFlags", 1)]),
        ],
    }
