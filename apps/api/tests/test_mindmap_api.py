"""HTTP contract tests for the mindmap endpoints."""

from __future__ import annotations

import os
import unittest

from fastapi import Request
from fastapi.testclient import TestClient

from notmiro_api.adapters.storage import InMemoryFileStorage
from notmiro_api.core.config import get_settings
from notmiro_api.main import create_app
from notmiro_api.routes.dependencies import get_storage

_ALICE = {"Authorization": "Bearer test:alice"}
_BOB = {"Authorization": "Bearer test:bob"}


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "NOTMIRO_AUTH_PROVIDER",
        "NOTMIRO_STORAGE_BACKEND",
        "NOTMIRO_FIREBASE_PROJECT_ID",
        "NOTMIRO_FIREBASE_AUDIENCE",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["NOTMIRO_AUTH_PROVIDER"] = "mock"
        os.environ["NOTMIRO_STORAGE_BACKEND"] = "memory"
        os.environ["NOTMIRO_FIREBASE_PROJECT_ID"] = "test-project"
        os.environ["NOTMIRO_FIREBASE_AUDIENCE"] = "test-audience"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class MindmapApiTests(_SettingsEnvCase):
    def setUp(self) -> None:
        super().setUp()
        self.storage = InMemoryFileStorage(clock=lambda: 1_700_000_000)
        self.app = create_app(storage=self.storage)
        self.client = TestClient(self.app)

    def test_save_list_load_delete_round_trip(self) -> None:
        saved = self.client.post(
            "/api/mindmap/save",
            headers=_ALICE,
            json={"filename": "trip", "content": '{"nodes":[]}'},
        )
        self.assertEqual(saved.status_code, 200)
        self.assertEqual(saved.json(), {"status": "success"})

        listed = self.client.get("/api/mindmap/list", headers=_ALICE)
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(
            listed.json(),
            {"status": "success", "files": [{"name": "trip.mindmap", "mtime": 1_700_000_000}]},
        )

        loaded = self.client.get("/api/mindmap/load", headers=_ALICE, params={"filename": "trip"})
        self.assertEqual(loaded.status_code, 200)
        self.assertEqual(loaded.json(), {"status": "success", "content": '{"nodes":[]}'})

        deleted = self.client.delete("/api/mindmap/delete", headers=_ALICE, params={"filename": "trip"})
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json(), {"status": "success"})

        self.assertEqual(self.client.get("/api/mindmap/list", headers=_ALICE).json()["files"], [])

    def test_save_accepts_form_encoded_body(self) -> None:
        saved = self.client.post(
            "/api/mindmap/save",
            headers=_ALICE,
            data={"filename": "trip", "content": '{"nodes":[]}'},
        )
        self.assertEqual(saved.status_code, 200)
        self.assertEqual(saved.json(), {"status": "success"})

        loaded = self.client.get("/api/mindmap/load", headers=_ALICE, params={"filename": "trip"})
        self.assertEqual(loaded.json(), {"status": "success", "content": '{"nodes":[]}'})

    def test_form_body_missing_content_returns_400_envelope(self) -> None:
        response = self.client.post("/api/mindmap/save", headers=_ALICE, data={"filename": "trip"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"status": "error", "message": "Invalid request payload"})
        self.assertEqual(self.storage.call_count, 0)

    def test_malformed_json_body_returns_400_envelope(self) -> None:
        response = self.client.post(
            "/api/mindmap/save",
            headers={**_ALICE, "Content-Type": "application/json"},
            content=b"{not json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"status": "error", "message": "Invalid request payload"})

    def test_list_for_new_user_is_empty_success(self) -> None:
        response = self.client.get("/api/mindmap/list", headers=_ALICE)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "success", "files": []})
        self.assertTrue(self.storage.node_exists("alice", "NotMiro"))

    def test_missing_namespace_and_missing_document_return_distinct_404_messages(self) -> None:
        no_namespace = self.client.get("/api/mindmap/load", headers=_ALICE, params={"filename": "trip"})
        self.assertEqual(no_namespace.status_code, 404)
        self.assertEqual(no_namespace.json(), {"status": "error", "message": "No mindmaps found"})

        self.client.get("/api/mindmap/list", headers=_ALICE)

        missing = self.client.delete("/api/mindmap/delete", headers=_ALICE, params={"filename": "trip"})
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"status": "error", "message": "Mindmap not found"})

    def test_documents_are_not_visible_to_other_users(self) -> None:
        self.client.post("/api/mindmap/save", headers=_ALICE, json={"filename": "mine", "content": "{}"})

        listed = self.client.get("/api/mindmap/list", headers=_BOB)
        self.assertEqual(listed.json()["files"], [])

        loaded = self.client.get("/api/mindmap/load", headers=_BOB, params={"filename": "mine"})
        self.assertEqual(loaded.status_code, 404)

    def test_unauthenticated_requests_return_403_without_storage_calls(self) -> None:
        requests = [
            ("post", "/api/mindmap/save", {"json": {"filename": "trip", "content": "{}"}}),
            ("get", "/api/mindmap/load", {"params": {"filename": "trip"}}),
            ("get", "/api/mindmap/list", {}),
            ("delete", "/api/mindmap/delete", {"params": {"filename": "trip"}}),
        ]
        for headers in ({}, {"Authorization": "Bearer not-a-valid-token"}):
            for method, path, kwargs in requests:
                with self.subTest(path=path, headers=headers):
                    response = getattr(self.client, method)(path, headers=headers, **kwargs)
                    self.assertEqual(response.status_code, 403)
                    self.assertEqual(response.json(), {"status": "error", "message": "User not logged in"})

        self.assertEqual(self.storage.call_count, 0)

    def test_storage_fault_returns_400_with_backend_message(self) -> None:
        self.storage.failure_message = "permission denied"

        with self.assertLogs("notmiro_api.services.mindmaps", level="ERROR"):
            response = self.client.post(
                "/api/mindmap/save",
                headers=_ALICE,
                json={"filename": "trip", "content": "{}"},
            )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"status": "error", "message": "permission denied"})

    def test_invalid_parameters_return_400_envelope(self) -> None:
        missing_content = self.client.post("/api/mindmap/save", headers=_ALICE, json={"filename": "trip"})
        self.assertEqual(missing_content.status_code, 400)
        self.assertEqual(missing_content.json(), {"status": "error", "message": "Invalid request payload"})

        missing_filename = self.client.get("/api/mindmap/load", headers=_ALICE)
        self.assertEqual(missing_filename.status_code, 400)
        self.assertEqual(missing_filename.json()["status"], "error")
        self.assertEqual(self.storage.call_count, 0)

    def test_auth_principal_is_attached_to_request_state(self) -> None:
        observed: dict[str, str] = {}

        def _override_storage(request: Request) -> InMemoryFileStorage:
            observed["user_id"] = request.state.auth_principal.user_id
            return self.storage

        self.app.dependency_overrides[get_storage] = _override_storage

        response = self.client.get("/api/mindmap/list", headers={"Authorization": "Bearer test:state-user"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(observed.get("user_id"), "state-user")

    def test_openapi_documents_contract_response_codes(self) -> None:
        paths = self.client.get("/openapi.json").json()["paths"]

        self.assertEqual(set(paths["/api/mindmap/save"]["post"]["responses"]), {"200", "400", "403"})
        self.assertEqual(set(paths["/api/mindmap/load"]["get"]["responses"]), {"200", "400", "403", "404"})
        self.assertEqual(set(paths["/api/mindmap/list"]["get"]["responses"]), {"200", "400", "403"})
        self.assertEqual(set(paths["/api/mindmap/delete"]["delete"]["responses"]), {"200", "400", "403", "404"})

        save_body = paths["/api/mindmap/save"]["post"]["requestBody"]["content"]
        self.assertEqual(set(save_body), {"application/json", "application/x-www-form-urlencoded"})


class AppStorageSelectionTests(_SettingsEnvCase):
    def test_memory_backend_is_built_from_settings(self) -> None:
        app = create_app()

        self.assertIsInstance(app.state.storage, InMemoryFileStorage)


if __name__ == "__main__":
    unittest.main()
