"""Configuration constants for the vendor rating engine."""
