"""Multi-user todo list API."""
