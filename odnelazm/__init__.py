"""Scraper and parser for Kenyan parliamentary hansard sittings, with a CLI and an MCP server."""

__version__ = "1.0.0b3"