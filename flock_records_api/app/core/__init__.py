"""Configuration, logging, storage and error types shared across the app."""
