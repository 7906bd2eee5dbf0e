"""
S3 Documents bucket configuration.

Settings for raw document storage and the batch upload ceiling.

Dependencies: pydantic_settings
System role: S3 documents bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3DocumentsSettings(BaseSettings):
    """Settings for S3 documents bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_DOCUMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="caritas-course-materials",
        description="S3 bucket for uploaded course materials",
    )
    region: str = Field(
        default="ap-southeast-2",
        description="AWS region for S3 bucket",
    )
    max_total_bytes: int = Field(
        default=20 * 1024 * 1024,
        description="Maximum combined size of one upload batch (default 20MB)",
    )
