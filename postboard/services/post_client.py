"""Encapsulation des appels HTTP au service de posts."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from postboard.config import AppConfig
from postboard.state import Post

logger = logging.getLogger(__name__)

AUTH_HEADER = "PinggyAuthHeader"
UNAUTHORIZED_MESSAGE = "Unauthorized: Check your Auth Code."


class PostServiceError(RuntimeError):
    """Erreur générique levée lors des appels au service de posts."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class UnauthorizedError(PostServiceError):
    """Le service a refusé le code d'authentification (401)."""

    def __init__(self) -> None:
        super().__init__(UNAUTHORIZED_MESSAGE)


class BadRequestError(PostServiceError):
    """Le service a rejeté les champs envoyés (400)."""


class HttpStatusError(PostServiceError):
    """Réponse non 2xx autre que 400/401."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(PostServiceError):
    """Échec réseau ou réponse illisible."""


def _with_body_text(message: str, response: httpx.Response) -> str:
    """Ajoute le texte renvoyé par le serveur au message, s'il y en a un."""
    try:
        text = response.text
    except (httpx.HTTPError, UnicodeDecodeError):
        return message
    return f"{message} - {text}" if text else message


def _join_bad_request(payload: Any) -> str | None:
    if isinstance(payload, dict):
        values = list(payload.values())
    elif isinstance(payload, list):
        values = payload
    elif isinstance(payload, str):
        return payload or None
    else:
        return None
    return ", ".join(str(value) for value in values)


class PostService:
    """Service responsable des requêtes de liste et de création de posts."""

    def __init__(
        self,
        config: AppConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(transport=self._transport)

    def list_posts(self, auth_code: str) -> list[Post]:
        """Récupère la liste des posts visibles avec ce code.

        Lève une ``PostServiceError`` dont le message est directement affichable.
        """
        url = self._config.endpoint("list")
        logger.debug("GET %s", url)

        try:
            with self._client() as client:
                response = client.get(url, headers={AUTH_HEADER: auth_code})
                if not response.is_success:
                    raise self._list_error(response)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Invalid JSON from %s: %s", url, exc)
            raise TransportError(f"Invalid response from server: {exc}") from exc

        if not isinstance(data, list):
            raise TransportError(f"Unexpected response format: {type(data).__name__}")

        posts = [Post.from_dict(item) for item in data if isinstance(item, dict)]
        logger.info("Fetched %d posts", len(posts))
        return posts

    def create_post(self, auth_code: str, title: str, body: str) -> None:
        """Crée un post. Aucun contenu de réponse n'est attendu en cas de succès."""
        url = self._config.endpoint("post")
        logger.debug("POST %s", url)

        try:
            with self._client() as client:
                response = client.post(
                    url,
                    headers={AUTH_HEADER: auth_code},
                    json={"title": title, "body": body},
                )
                if not response.is_success:
                    raise self._submit_error(response)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(str(exc)) from exc

        logger.info("Post submitted successfully")

    # -------------------------------------------------------------- Erreurs -
    @staticmethod
    def _list_error(response: httpx.Response) -> PostServiceError:
        status = response.status_code
        logger.warning("List request rejected with status %s", status)
        if status == 401:
            return UnauthorizedError()
        return HttpStatusError(
            status, _with_body_text(f"Failed to fetch posts: {status}", response)
        )

    @staticmethod
    def _submit_error(response: httpx.Response) -> PostServiceError:
        status = response.status_code
        logger.warning("Submission rejected with status %s", status)
        fallback = f"Submission failed with status: {status}"

        if status == 401:
            return UnauthorizedError()
        if status == 400:
            try:
                joined = _join_bad_request(response.json())
            except ValueError:
                joined = None
            if joined is None:
                return BadRequestError(fallback)
            return BadRequestError(f"Bad Request: {joined}")
        return HttpStatusError(status, _with_body_text(fallback, response))
