"""Service implementations for nixrun."""
