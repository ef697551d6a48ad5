"""Persistence: database session management and task-store backends."""
