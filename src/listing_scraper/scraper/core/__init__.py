"""Data models, browser factory and crawl service adapters."""
