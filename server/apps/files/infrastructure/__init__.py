"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Storage backend for uploaded bytes (S3/MinIO/R2)
- Metadata extraction and upload validation

Keep infrastructure concerns separate from business logic.
"""
