"""Command-line interface for feature-branching."""
