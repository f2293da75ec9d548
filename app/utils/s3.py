import boto3
from botocore.client import Config as BotoConfig
from app.core.config import settings

def make_s3_client(endpoint_url: str):
    cfg = BotoConfig(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
        connect_timeout=settings.STORE_TIMEOUT_SECONDS,
        read_timeout=settings.STORE_TIMEOUT_SECONDS,
        retries={"max_attempts": 2},
    )
    return boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.S3_KEY,
        aws_secret_access_key=settings.S3_SECRET,
        config=cfg,
        use_ssl=endpoint_url.startswith("https"),
    )

def make_s3_internal():
    return make_s3_client(str(settings.S3_ENDPOINT))

def delete_object(s3, *, bucket: str, key: str) -> None:
    s3.delete_object(Bucket=bucket, Key=key)

def public_object_url(base_url: str, file_name: str) -> str:
    """
    URL publique de lecture d'un objet du bucket : <base>/<file_name>.
    Seul endroit où cette URL est construite.
    """
    return f"{base_url.rstrip('/')}/{file_name}"
