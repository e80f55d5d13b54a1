import boto3

from minutes_studio.config import Settings


def get_session(settings: Settings) -> boto3.Session | None:
    """Build a boto3 session from explicit credentials, or None when storage is not configured."""
    if not settings.storage_configured:
        return None
    return boto3.Session(
        region_name=settings.aws_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )
