"""Core domain: exceptions, settings, schemas and pagination."""
