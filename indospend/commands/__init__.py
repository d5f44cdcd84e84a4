"""CLI command implementations (the presentation layer)."""
