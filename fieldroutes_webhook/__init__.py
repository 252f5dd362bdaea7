"""Vapi webhook adapter for the FieldRoutes API."""
