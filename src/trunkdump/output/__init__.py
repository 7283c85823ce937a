"""Reporters: Rich progress output, terminal summary, JSON export."""
