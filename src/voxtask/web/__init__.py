"""FastAPI web service."""
