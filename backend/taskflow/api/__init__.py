"""HTTP route modules for the `/api` surface."""
