"""Market data collaborators: fetchers, file handlers and validation."""
