"""Configuration for gistaviewer."""
