"""Garment tag extraction and validation for outfit critique text."""
