"""Worktop quotation engine: panel pricing, isometric preview and quote export."""
