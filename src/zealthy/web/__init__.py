"""Zealthy web API."""
