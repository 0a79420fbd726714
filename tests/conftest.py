from __future__ import annotations

from typing import Callable

import httpx
import pytest

from postboard.config import AppConfig
from postboard.services import PostService

API_URL = "https://posts.test"

Responder = Callable[[httpx.Request], httpx.Response]


class FakePostApi:
    """Service de posts simulé : une réponse par route, requêtes enregistrées."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, response: httpx.Response | Responder) -> None:
        if isinstance(response, httpx.Response):
            template = response
            self.routes[(method, path)] = lambda _request: httpx.Response(
                template.status_code,
                headers=template.headers,
                content=template.content,
            )
        else:
            self.routes[(method, path)] = response

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, text="no route")
        return responder(request)


@pytest.fixture
def api() -> FakePostApi:
    return FakePostApi()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(api_url=API_URL)


@pytest.fixture
def service(api: FakePostApi, config: AppConfig) -> PostService:
    return PostService(config, transport=httpx.MockTransport(api.handle))
