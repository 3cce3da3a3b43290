"""Fuzzy process finder and killer."""
