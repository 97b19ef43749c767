"""Eisenhower task board and AI blueprint organizer."""
