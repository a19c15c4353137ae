"""Tests for the fort14mesh package."""
