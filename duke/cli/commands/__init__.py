"""Operation handlers, one module per operation."""
