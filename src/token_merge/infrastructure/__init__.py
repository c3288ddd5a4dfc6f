"""Cross-cutting infrastructure: logging, run context, file system."""
