"""Adapters from real host hardware libraries to the driver's protocols."""
