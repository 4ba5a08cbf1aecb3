"""Tests - pytest suite for stark_primitives."""
