"""Stand-in for the remote weather service, for development and tests."""
