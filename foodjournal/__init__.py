"""Food Journal — photo food diary with a local SQLite store."""
