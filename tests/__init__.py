"""Tests for the global table custom resource."""
