"""Folio - asset resolution and delivery for portfolio documents."""
