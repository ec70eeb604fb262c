"""Background jobs built on top of the repositories."""
