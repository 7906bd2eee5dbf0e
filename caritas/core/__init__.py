"""Core domain primitives: exceptions and storage key generation."""
