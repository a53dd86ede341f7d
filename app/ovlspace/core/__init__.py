"""Core infrastructure: paths, configuration, theme and privilege checks."""
