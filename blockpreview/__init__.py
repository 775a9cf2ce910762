"""Live preview rendering for block list content."""
