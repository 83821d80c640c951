"""Core filesystem inspection and configuration."""
