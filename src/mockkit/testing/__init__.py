from .plugin import mock_factory, mock_test_id

__all__ = ["mock_factory", "mock_test_id"]
