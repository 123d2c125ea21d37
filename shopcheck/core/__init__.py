"""Core shopcheck components."""
