"""Crawl orchestration, external services and the pipeline entry point."""
