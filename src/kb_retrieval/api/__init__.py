"""FastAPI application exposing knowledge-base search."""
