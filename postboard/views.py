"""Description, indépendante de Tkinter, de ce qu'affiche la liste des posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from postboard.state import Post

PROMPT_MESSAGE = "Please enter an Auth Code above to view posts."
LOADING_MESSAGE = "Loading posts..."
ERROR_PREFIX = "Error fetching posts: "
EMPTY_MESSAGE = "No posts found."
AUTH_HEADER_LABEL = "Auth Header Used: "


class ListDisplay(Enum):
    PROMPT = "prompt"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POSTS = "posts"


@dataclass(frozen=True, slots=True)
class PostItemView:
    title: str
    body: str
    auth_header_line: str


@dataclass(frozen=True, slots=True)
class PostListView:
    """Ce que la liste doit afficher : un message, ou les posts."""

    display: ListDisplay
    message: str = ""
    items: tuple[PostItemView, ...] = field(default_factory=tuple)


def describe_post_list(
    posts: Sequence[Post],
    auth_code_provided: bool,
    is_loading: bool,
    error: str | None,
) -> PostListView:
    """Choisit l'état d'affichage, dans cet ordre de priorité :
    invitation à saisir le code, chargement, erreur, liste vide, posts.
    """
    if not auth_code_provided and not is_loading:
        return PostListView(ListDisplay.PROMPT, PROMPT_MESSAGE)
    if is_loading:
        return PostListView(ListDisplay.LOADING, LOADING_MESSAGE)
    if error is not None:
        return PostListView(ListDisplay.ERROR, f"{ERROR_PREFIX}{error}")
    if not posts:
        return PostListView(ListDisplay.EMPTY, EMPTY_MESSAGE)

    items = tuple(
        PostItemView(
            title=post.title,
            body=post.body,
            auth_header_line=f"{AUTH_HEADER_LABEL}{post.pinggy_auth_header}",
        )
        for post in posts
    )
    return PostListView(ListDisplay.POSTS, items=items)
