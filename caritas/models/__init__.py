"""API contracts and domain records."""
