"""Happy-hour management dashboard API."""
