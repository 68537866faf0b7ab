"""Configuration, errors, audit logging and run locks."""
