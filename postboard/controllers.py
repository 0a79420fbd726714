"""Coordinateur de la page et contrôleur du formulaire de création.

Le coordinateur (``PostBoard``) possède le code d'authentification et la liste des
posts ; le formulaire (``PostForm``) ne possède que ses propres champs et reçoit le
code et le rappel de succès du coordinateur. L'interface lit l'état et s'abonne aux
changements, sans jamais le modifier directement.
"""

from __future__ import annotations

import logging
from typing import Callable

from postboard.runner import ImmediateRunner, TaskRunner
from postboard.services import PostService
from postboard.state import BoardState, FormState, Post
from postboard.views import PostListView, describe_post_list

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Title, Body, and Auth Code cannot be empty."
LIST_FALLBACK_MESSAGE = "An unknown error occurred fetching posts."
SUBMIT_FALLBACK_MESSAGE = "An unknown error occurred during submission."

Listener = Callable[[], None]


def _error_message(exc: BaseException, fallback: str) -> str:
    return str(exc) or fallback


class _Observable:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Enregistre un rappel appelé après chaque changement d'état."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


class PostBoard(_Observable):
    """Coordinateur : code d'authentification partagé et liste des posts."""

    def __init__(
        self,
        service: PostService,
        state: BoardState | None = None,
        runner: TaskRunner | None = None,
    ) -> None:
        super().__init__()
        self._service = service
        self._state = state or BoardState()
        self._runner = runner or ImmediateRunner()
        self._request_seq = 0

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def auth_code(self) -> str:
        return self._state.auth_code

    @property
    def list_view(self) -> PostListView:
        return describe_post_list(
            self._state.posts,
            self._state.auth_code_provided,
            self._state.is_list_loading,
            self._state.list_error,
        )

    def create_form(self) -> PostForm:
        """Construit le formulaire relié au code et au rappel de ce coordinateur."""
        return PostForm(
            self._service,
            auth_code=lambda: self._state.auth_code,
            on_success=self.on_post_success,
            runner=self._runner,
        )

    def mount(self) -> None:
        self.refresh_list()

    def set_auth_code(self, code: str) -> None:
        """Chaque modification du code relance immédiatement la liste."""
        if code == self._state.auth_code:
            return
        self._state.auth_code = code
        self.refresh_list()

    def on_post_success(self) -> None:
        logger.info("Post successful, refreshing list...")
        self.refresh_list()

    def refresh_list(self) -> None:
        # Toute nouvelle requête, ou l'effacement du code, rend caduques les précédentes.
        self._request_seq += 1
        seq = self._request_seq
        auth_code = self._state.auth_code

        if not auth_code.strip():
            self._state.clear_posts()
            self._state.list_error = None
            self._state.is_list_loading = False
            self._notify()
            return

        self._state.is_list_loading = True
        self._state.list_error = None
        self._notify()

        self._runner.submit(
            lambda: self._service.list_posts(auth_code),
            lambda result, error: self._finish_refresh(seq, result, error),
        )

    def _finish_refresh(
        self,
        seq: int,
        posts: list[Post] | None,
        error: BaseException | None,
    ) -> None:
        if seq != self._request_seq:
            logger.debug("Dropping response for superseded list request #%d", seq)
            return

        try:
            if error is not None:
                logger.error("Error fetching posts: %s", error)
                self._state.clear_posts()
                self._state.list_error = _error_message(error, LIST_FALLBACK_MESSAGE)
            else:
                self._state.posts = list(posts or [])
        finally:
            self._state.is_list_loading = False
        self._notify()


class PostForm(_Observable):
    """Formulaire de création : titre et corps locaux, code fourni par le coordinateur."""

    def __init__(
        self,
        service: PostService,
        *,
        auth_code: Callable[[], str],
        on_success: Callable[[], None],
        state: FormState | None = None,
        runner: TaskRunner | None = None,
    ) -> None:
        super().__init__()
        self._service = service
        self._auth_code = auth_code
        self._on_success = on_success
        self._state = state or FormState()
        self._runner = runner or ImmediateRunner()

    @property
    def state(self) -> FormState:
        return self._state

    def set_title(self, title: str) -> None:
        self._state.title = title

    def set_body(self, body: str) -> None:
        self._state.body = body

    def submit(self) -> bool:
        """Valide puis envoie le post.

        Retourne False si aucune requête n'a été émise : envoi déjà en cours ou
        validation locale en échec.
        """
        if self._state.is_submitting:
            logger.debug("Submission already in flight, ignoring")
            return False

        self._state.error = None

        title, body, auth_code = self._state.title, self._state.body, self._auth_code()
        if not title.strip() or not body.strip() or not auth_code.strip():
            self._state.error = VALIDATION_MESSAGE
            self._notify()
            return False

        self._state.is_submitting = True
        self._notify()

        self._runner.submit(
            lambda: self._service.create_post(auth_code, title, body),
            self._finish_submit,
        )
        return True

    def _finish_submit(self, _: object, error: BaseException | None) -> None:
        try:
            if error is not None:
                logger.error("Submission error: %s", error)
                self._state.error = _error_message(error, SUBMIT_FALLBACK_MESSAGE)
            else:
                self._state.reset_fields()
                self._on_success()
        finally:
            self._state.is_submitting = False
        self._notify()
