"""Local credential storage and the inventory API client."""
