"""Scrape pipeline: schema, parsing, mapping and encoding."""
