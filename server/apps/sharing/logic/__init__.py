"""Business logic for public folder share links."""
