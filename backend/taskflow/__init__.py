"""Task Flow backend package."""
