"""Tests for the cached MongoDB client."""

import unittest
from unittest.mock import patch, MagicMock

from pymongo.errors import ConnectionFailure, PyMongoError

from adapter.mongodb import connection
from adapter.mongodb.connection import CLIENT_OPTIONS, get_mongodb_client, reset_client


class TestGetMongoDBClient(unittest.TestCase):

    def setUp(self):
        reset_client()

    def tearDown(self):
        reset_client()

    @patch('adapter.mongodb.connection.MONGO_URL', None)
    @patch('adapter.mongodb.connection.MongoClient')
    def test_returns_none_without_url(self, mock_client_cls):
        self.assertIsNone(get_mongodb_client())
        mock_client_cls.assert_not_called()

    @patch('adapter.mongodb.connection.MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_connects_and_caches_client(self, mock_client_cls):
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client

        first = get_mongodb_client()
        second = get_mongodb_client()

        self.assertIs(first, mock_client)
        self.assertIs(second, mock_client)
        mock_client_cls.assert_called_once()

    @patch('adapter.mongodb.connection.MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_initial_failure_is_not_retried(self, mock_client_cls):
        mock_client_cls.return_value.admin.command.side_effect = ConnectionFailure("refused")

        self.assertIsNone(get_mongodb_client())
        self.assertIsNone(get_mongodb_client())
        mock_client_cls.assert_called_once()

    @patch('adapter.mongodb.connection.MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_reconnects_when_cached_client_stops_answering(self, mock_client_cls):
        stale = MagicMock()
        fresh = MagicMock()
        mock_client_cls.side_effect = [stale, fresh]

        self.assertIs(get_mongodb_client(), stale)
        stale.admin.command.side_effect = PyMongoError("connection reset")

        self.assertIs(get_mongodb_client(), fresh)
        self.assertIs(connection._state.client, fresh)

    @patch('adapter.mongodb.connection.MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_failed_reconnect_is_retried_on_next_call(self, mock_client_cls):
        stale = MagicMock()
        unreachable = MagicMock()
        fresh = MagicMock()
        mock_client_cls.side_effect = [stale, unreachable, fresh]

        get_mongodb_client()
        stale.admin.command.side_effect = PyMongoError("connection reset")
        unreachable.admin.command.side_effect = ConnectionFailure("refused")

        self.assertIsNone(get_mongodb_client())
        self.assertIs(get_mongodb_client(), fresh)
        self.assertEqual(mock_client_cls.call_count, 3)

    @patch('adapter.mongodb.connection.MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_client_uses_fail_fast_options(self, mock_client_cls):
        get_mongodb_client()

        mock_client_cls.assert_called_once_with('mongodb://localhost:27017', **CLIENT_OPTIONS)
        self.assertEqual(CLIENT_OPTIONS['serverSelectionTimeoutMS'], 5000)

    @patch('adapter.mongodb.connection.MONGO_URL', None)
    def test_reset_clears_configuration_failure(self):
        self.assertIsNone(get_mongodb_client())
        self.assertTrue(connection._state.unavailable)

        reset_client()

        self.assertFalse(connection._state.unavailable)
        self.assertIsNone(connection._state.client)


if __name__ == '__main__':
    unittest.main()
