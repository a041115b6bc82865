"""Settings, logging, errors and application state."""
