"""Tests for the health check endpoint."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from api.main import app


class TestHealthRoute(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    @patch('api.routes.health.get_mongodb_client')
    def test_healthy_when_mongodb_answers(self, mock_get_client):
        mock_get_client.return_value = MagicMock()

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["services"]["mongodb"]["status"], "healthy")
        self.assertTrue(body["timestamp"].endswith("Z"))

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_mongodb_not_configured(self, mock_get_client):
        mock_get_client.return_value = None

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["status"], "degraded")

    @patch('api.routes.health.get_mongodb_client')
    def test_degraded_when_ping_fails(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.admin.command.side_effect = PyMongoError("timed out")
        mock_get_client.return_value = mock_client

        response = self.client.get("/health")

        self.assertEqual(response.status_code, 503)
        self.assertIn("timed out", response.json()["services"]["mongodb"]["message"])


if __name__ == '__main__':
    unittest.main()
