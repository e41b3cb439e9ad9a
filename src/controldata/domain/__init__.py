"""Domain layer - control file model, validation and rendering rules."""
