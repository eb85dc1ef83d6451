"""Command-line host for gistaviewer."""
