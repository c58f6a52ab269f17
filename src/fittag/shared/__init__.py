"""Shared infrastructure: run logging and LLM providers."""
