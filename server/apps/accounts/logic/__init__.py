"""Business logic for accounts: signup and identity lookups."""
