"""Tests for the hash gadgets."""
