"""Domain services: search, suggestions, catalog views, completion and stats."""
