"""Unit tests for domain error → HTTP status mapping."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import get_user_repo
from api.errors import status_for
from api.security import Principal, get_current_principal
from domain.model.errors import (
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)


class TestStatusFor(unittest.TestCase):

    def test_mapping(self):
        self.assertEqual(status_for(ValidationError('email', 'bad')), 400)
        self.assertEqual(status_for(NotFoundError('missing')), 404)
        self.assertEqual(status_for(ConflictError('taken')), 409)
        self.assertEqual(status_for(InternalError('down')), 500)
        self.assertEqual(status_for(DomainError('other')), 500)


class TestInternalErrorResponse(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = MagicMock()
        app.dependency_overrides[get_user_repo] = lambda: self.repo
        app.dependency_overrides[get_current_principal] = lambda: Principal(subject="tester")

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_store_failure_returns_500_body(self):
        self.repo.find_all.side_effect = RuntimeError("connection reset")

        response = self.client.get("/users/all")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {
            "status": 500,
            "message": "Failed to list users",
            "error": "internal_error",
        })


if __name__ == '__main__':
    unittest.main()
