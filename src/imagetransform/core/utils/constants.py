"""Global constants used throughout the application.

This module centralizes error codes, format tables, URL lifetimes and the
names of the environment variables the service reads its configuration from.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_OPTIONS = "INVALID_TRANSFORMATION_OPTIONS"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"

# Not Found / Access Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_ACCESS_DENIED = "ACCESS_DENIED"
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"

# Image Processing Errors
ERROR_CODE_DECODE_FAILED = "IMAGE_DECODE_FAILED"
ERROR_CODE_ENCODE_FAILED = "IMAGE_ENCODE_FAILED"
ERROR_CODE_TRANSFORMATION_FAILED = "TRANSFORMATION_FAILED"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_BLOB_NOT_FOUND = "BLOB_NOT_FOUND"
ERROR_CODE_BLOB_UPLOAD_FAILED = "BLOB_UPLOAD_FAILED"
ERROR_CODE_BLOB_DOWNLOAD_FAILED = "BLOB_DOWNLOAD_FAILED"
ERROR_CODE_BLOB_DELETE_FAILED = "BLOB_DELETE_FAILED"
ERROR_CODE_PRESIGNED_URL_FAILED = "PRESIGNED_URL_FAILED"

# Metadata / Repository Errors
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_CONFLICT = "METADATA_CONFLICT"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"
ERROR_CODE_METADATA_INVALID_FORMAT = "METADATA_INVALID_FORMAT"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

# ============================================================================
# Storage Layout
# ============================================================================

ORIGINAL_KEY_PREFIX = "images"
TRANSFORMED_KEY_PREFIX = "transformed"

IMAGE_ID_PREFIX = "img_"
TRANSFORMED_IMAGE_ID_PREFIX = "tfm_"

# ============================================================================
# Access URL Policy (seconds)
# ============================================================================

UPLOAD_URL_TTL_SECONDS: Final[int] = 15 * 60
DOWNLOAD_URL_TTL_SECONDS: Final[int] = 60 * 60

# ============================================================================
# Image Encoding
# ============================================================================

JPEG_QUALITY = 90
WEBP_QUALITY = 90

# Upper bound for any requested or derived output edge, in pixels
MAX_DIMENSION: Final[int] = 10_000

# ============================================================================
# Pagination
# ============================================================================

DEFAULT_PAGE = 0
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

# ============================================================================
# DynamoDB Indexes
# ============================================================================

OWNER_CREATED_INDEX = "owner-created-index"
PARENT_CREATED_INDEX = "parent-created-index"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "ImageTransformationService"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_METADATA_TABLE_NAME = "IMAGE_METADATA_TABLE_NAME"
ENV_TRANSFORMED_IMAGE_TABLE_NAME = "TRANSFORMED_IMAGE_TABLE_NAME"
ENV_CASCADE_DELETE_TRANSFORMATIONS = "CASCADE_DELETE_TRANSFORMATIONS"
ENV_APP_RUNTIME = "APP_RUNTIME"

DEFAULT_AWS_REGION = "us-east-1"
LOCALSTACK_URL = "http://localstack"
LOCALHOST_URL = "http://localhost"
