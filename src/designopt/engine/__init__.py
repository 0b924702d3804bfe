"""Optimization engines and their configuration."""
