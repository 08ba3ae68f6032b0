"""Shared test setup: mockfirestore patches are applied once per session."""

from tests.mock_utils import patch_mockfirestore

patch_mockfirestore()
