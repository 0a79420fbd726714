"""Structures de données partagées entre la couche UI et les contrôleurs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class Post:
    """Un post tel que renvoyé par le service distant."""

    title: str
    body: str
    pinggy_auth_header: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Post:
        return cls(
            title=_text(data.get("title")),
            body=_text(data.get("body")),
            pinggy_auth_header=_text(data.get("pinggyAuthHeader")),
        )


def _text(value: Any) -> str:
    # null et clé absente s'affichent comme une chaîne vide.
    return "" if value is None else str(value)


@dataclass(slots=True)
class BoardState:
    """État partagé détenu par le coordinateur."""

    auth_code: str = ""
    posts: list[Post] = field(default_factory=list)
    is_list_loading: bool = False
    list_error: str | None = None

    @property
    def auth_code_provided(self) -> bool:
        """Retourne True si un code d'authentification non vide est saisi."""
        return bool(self.auth_code.strip())

    def clear_posts(self) -> None:
        self.posts = []


@dataclass(slots=True)
class FormState:
    """État local du formulaire de création."""

    title: str = ""
    body: str = ""
    is_submitting: bool = False
    error: str | None = None

    def reset_fields(self) -> None:
        """Vide le titre et le corps ; le code d'authentification n'est pas concerné."""
        self.title = ""
        self.body = ""
