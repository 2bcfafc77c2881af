"""Core services: configuration, theme, logging and btrfs helpers."""
