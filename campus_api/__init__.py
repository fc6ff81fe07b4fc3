"""Campus activity management API."""
