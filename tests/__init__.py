"""Tests for enginereg."""
