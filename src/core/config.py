from os import environ

import boto3
from pydantic import BaseModel, ConfigDict

_cached_clerk_secret: str | None = None


def _resolve_clerk_secret() -> str:
    """Fetch Clerk secret from Secrets Manager at runtime, with caching."""
    global _cached_clerk_secret
    if _cached_clerk_secret is not None:
        return _cached_clerk_secret

    # Local dev: use env var directly
    direct = environ.get("CLERK_SECRET_KEY", "")
    if direct:
        _cached_clerk_secret = direct
        return direct

    # Deployed: fetch from Secrets Manager by ARN
    arn = environ.get("CLERK_SECRET_ARN", "")
    if not arn:
        return ""

    client = boto3.client("secretsmanager")
    _cached_clerk_secret = client.get_secret_value(SecretId=arn)["SecretString"]
    return _cached_clerk_secret


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    dynamodb_endpoint: str | None = None
    s3_endpoint: str | None = None
    trips_table: str
    trip_members_table: str
    trip_invites_table: str
    categories_table: str
    locations_table: str
    attachments_table: str
    users_table: str
    attachments_bucket: str
    clerk_secret_key: str = ""
    foursquare_api_key: str = ""
    allowed_origins: tuple[str, ...]
    environment: str


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config. For testing only."""
    global _cached_config, _cached_clerk_secret
    _cached_config = None
    _cached_clerk_secret = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "us-east-1"),
        dynamodb_endpoint=environ.get("DYNAMODB_ENDPOINT"),
        s3_endpoint=environ.get("S3_ENDPOINT"),
        trips_table=environ.get("TRIPS_TABLE", "TripperTrips"),
        trip_members_table=environ.get("TRIP_MEMBERS_TABLE", "TripperTripMembers"),
        trip_invites_table=environ.get("TRIP_INVITES_TABLE", "TripperTripInvites"),
        categories_table=environ.get("CATEGORIES_TABLE", "TripperCategories"),
        locations_table=environ.get("LOCATIONS_TABLE", "TripperLocations"),
        attachments_table=environ.get("ATTACHMENTS_TABLE", "TripperAttachments"),
        users_table=environ.get("USERS_TABLE", "TripperUsers"),
        attachments_bucket=environ.get("ATTACHMENTS_BUCKET", "tripper-attachments"),
        clerk_secret_key=_resolve_clerk_secret(),
        foursquare_api_key=environ.get("FOURSQUARE_API_KEY", ""),
        allowed_origins=_split_origins(
            environ.get(
                "ALLOWED_ORIGINS",
                "https://tripper.vercel.app,http://localhost:5173,http://localhost:5174",
            )
        ),
        environment=environ.get("ENVIRONMENT", "local"),
    )
    return _cached_config
