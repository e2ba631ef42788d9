"""Shared config and progress helpers."""
