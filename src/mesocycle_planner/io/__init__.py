"""JSON serialization and the file-backed mesocycle store."""
