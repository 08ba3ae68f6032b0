"""Session handling shared by every blueprint."""
