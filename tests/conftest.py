"""
Pytest configuration for the invoicing dashboard tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for testing service functions.
    Returns a MagicMock that simulates the query builder chain.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def revalidate_path():
    """Records every path passed to revalidate_path."""
    return MagicMock()
