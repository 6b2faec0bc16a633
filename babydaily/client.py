"""Lightweight HTTP client for the BabyDaily API."""

from __future__ import annotations

import os
from typing import Any

import requests

API_BASE = os.getenv("BABYDAILY_API_URL", "http://localhost:8000")
TIMEOUT = 10  # seconds


class ApiClient:
    """Persistence collaborator over HTTP: list / create / update / delete per kind."""

    def __init__(self, base_url: str = API_BASE, timeout: float = TIMEOUT,
                 session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _request(self, method: str, path: str, payload: dict | None = None) -> Any:
        resp = self.http.request(
            method, f"{self.base_url}{path}", json=payload, timeout=self.timeout
        )
        resp.raise_for_status()
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # ── Records ────────────────────────────────────────────────────────────

    def list(self, baby_id: int, kind: str) -> list[dict]:
        return self._request("GET", f"/{kind}/{baby_id}")

    def create(self, baby_id: int, kind: str, fields: dict) -> dict:
        return self._request("POST", f"/{kind}/{baby_id}", fields)

    def update(self, record_id: int, kind: str, fields: dict) -> dict:
        return self._request("PUT", f"/{kind}/{record_id}", fields)

    def delete(self, record_id: int, kind: str) -> None:
        self._request("DELETE", f"/{kind}/{record_id}")

    # ── Profile & export ──────────────────────────────────────────────────

    def get_baby(self, baby_id: int) -> dict:
        return self._request("GET", f"/babies/{baby_id}")

    def export_csv(self, baby_id: int) -> str:
        resp = self.http.get(f"{self.base_url}/export/{baby_id}", timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    # ── Accounts ───────────────────────────────────────────────────────────

    def register(self, username: str, password: str, answers: dict) -> dict:
        return self._request("POST", "/auth/register", {
            "username": username,
            "password": password,
            "answers": answers,
        })

    def login(self, username: str, password: str) -> dict:
        return self._request("POST", "/auth/login", {"username": username, "password": password})

    def get_user(self, user_id: int) -> dict:
        return self._request("GET", f"/users/{user_id}")

    def reset_password(self, username: str, answers: dict, new_password: str) -> dict:
        return self._request("POST", "/auth/reset-password", {
            "username": username,
            "answers": answers,
            "new_password": new_password,
        })
