"""Command line interface for piimask."""
