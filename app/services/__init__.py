"""Domain services: ranking, persistence and the interactive session."""
