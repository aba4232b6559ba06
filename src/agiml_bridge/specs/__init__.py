"""Bundled AGIML specification texts (``*.agiml``)."""
