"""Compiled-in configuration."""
