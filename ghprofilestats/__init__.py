"""GitHub profile statistics gathered over GraphQL and written into SVG cards."""

__version__ = "0.1.0"