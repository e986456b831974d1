"""Core value types: ranges, fixes, errors, config."""
