"""CLI module for chronomate."""
