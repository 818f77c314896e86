"""Command line interface for the GeoLearn engine."""
