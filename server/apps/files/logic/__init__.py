"""Business logic layer for files app.

This package contains all business logic for folders and files:
- Owner-scoped lookups shared by every operation
- Folder creation, listing and cascade deletion
- File upload, listing, download lookup and deletion

Every operation takes the acting user as its first argument and only
touches records that user owns. Records of other users are reported
exactly like missing ones.
"""
