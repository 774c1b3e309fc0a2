from fastapi.testclient import TestClient
from httpx import Response
from typing import Any


class APIClient:
    """Client for the queue API acting as one user."""

    def __init__(self, client: TestClient, user_id: str = "user-1", header: str = "X-User-Id"):
        """Initialize the API client.

        Args:
            client: TestClient wrapping the application
            user_id: Caller identity sent with every request
            header: Name of the identity header
        """
        self.client = client
        self.user_id = user_id
        self.header = header

    @property
    def headers(self) -> dict[str, str]:
        return {self.header: self.user_id}

    def get_queue(self) -> Response:
        return self.client.get("/api/queue", headers=self.headers)

    def add(self, track_id: Any, position: str | None = None, index: int | None = None) -> Response:
        body: dict[str, Any] = {"trackId": track_id}
        if position is not None:
            body["position"] = position
        if index is not None:
            body["index"] = index
        return self.client.post("/api/queue", json=body, headers=self.headers)

    def add_multiple(self, track_ids: Any, position: str | None = None) -> Response:
        body: dict[str, Any] = {"trackIds": track_ids}
        if position is not None:
            body["position"] = position
        return self.client.post("/api/queue/multiple", json=body, headers=self.headers)

    def remove(self, item_ids: list[str] | None = None) -> Response:
        """DELETE with ``{"itemIds": [...]}``, or with no body at all."""
        if item_ids is None:
            return self.client.request("DELETE", "/api/queue", headers=self.headers)
        return self.client.request("DELETE", "/api/queue", json={"itemIds": item_ids}, headers=self.headers)

    def remove_raw(self, content: str) -> Response:
        """DELETE with an arbitrary body."""
        headers = {**self.headers, "Content-Type": "application/json"}
        return self.client.request("DELETE", "/api/queue", content=content, headers=headers)

    def clear(self) -> Response:
        return self.remove()

    def reorder(self, item_id: Any, new_position: Any) -> Response:
        body = {"itemId": item_id, "newPosition": new_position}
        return self.client.put("/api/queue/reorder", json=body, headers=self.headers)

    def update_state(self, **fields: Any) -> Response:
        return self.client.put("/api/queue/state", json=fields, headers=self.headers)

    def order(self) -> list[int]:
        """Track ids of the current queue, in order."""
        return [item["track"]["id"] for item in self.get_queue().json()["items"]]

    def item_ids(self) -> list[str]:
        return [item["id"] for item in self.get_queue().json()["items"]]
