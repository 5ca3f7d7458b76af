"""Candidate URL selection."""
