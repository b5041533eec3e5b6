"""Test suite for gencli."""
