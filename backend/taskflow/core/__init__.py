"""Core runtime configuration, logging, and error handling."""
