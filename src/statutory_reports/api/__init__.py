"""HTTP API for statutory report downloads."""
