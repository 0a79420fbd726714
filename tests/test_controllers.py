"""
Tests du coordinateur de la page et du formulaire de création.

Les requêtes passent par ImmediateRunner, sauf quand un test doit retenir
les réponses : ManualRunner les libère alors à la main.
"""

import httpx
import pytest

from postboard.controllers import (
    LIST_FALLBACK_MESSAGE,
    SUBMIT_FALLBACK_MESSAGE,
    VALIDATION_MESSAGE,
    PostBoard,
)
from postboard.state import BoardState, Post
from postboard.views import ListDisplay

SECRET_POSTS = [{"title": "A", "body": "B", "pinggyAuthHeader": "secret1"}]


class ManualRunner:
    """Garde les travaux en attente jusqu'à ce que le test les termine."""

    def __init__(self):
        self.pending = []

    def submit(self, work, on_done):
        self.pending.append((work, on_done))

    def complete(self, index=0):
        work, on_done = self.pending.pop(index)
        try:
            result, error = work(), None
        except Exception as exc:  # noqa: BLE001
            result, error = None, exc
        on_done(result, error)


@pytest.fixture
def board(service):
    return PostBoard(service)


class TestRefreshList:
    """Rafraîchissement de la liste par le coordinateur."""

    @pytest.mark.parametrize("auth_code", ["", " ", "\t\n  "])
    def test_blank_auth_code_resets_without_request(self, api, service, auth_code):
        state = BoardState(
            auth_code=auth_code,
            posts=[Post("old", "post", "x")],
            list_error="previous failure",
            is_list_loading=True,
        )
        board = PostBoard(service, state=state)

        board.refresh_list()

        assert api.requests == []
        assert state.posts == []
        assert state.list_error is None
        assert state.is_list_loading is False

    def test_mount_with_blank_code_shows_prompt(self, api, board):
        board.mount()

        assert api.requests == []
        assert board.list_view.display is ListDisplay.PROMPT

    def test_non_blank_code_issues_one_request(self, api, board):
        api.on("GET", "/list", httpx.Response(200, json=[]))

        board.set_auth_code("secret1")

        calls = api.calls("GET", "/list")
        assert len(calls) == 1
        assert calls[0].headers["PinggyAuthHeader"] == "secret1"

    def test_every_keystroke_refreshes(self, api, board):
        api.on("GET", "/list", httpx.Response(200, json=[]))

        for code in ("s", "se", "sec"):
            board.set_auth_code(code)

        sent = [r.headers["PinggyAuthHeader"] for r in api.calls("GET", "/list")]
        assert sent == ["s", "se", "sec"]

    def test_same_code_is_not_a_change(self, api, board):
        api.on("GET", "/list", httpx.Response(200, json=[]))

        board.set_auth_code("secret1")
        board.set_auth_code("secret1")

        assert len(api.calls("GET", "/list")) == 1

    def test_posts_are_rendered(self, api, board):
        api.on("GET", "/list", httpx.Response(200, json=SECRET_POSTS))

        board.set_auth_code("secret1")

        view = board.list_view
        assert view.display is ListDisplay.POSTS
        assert len(view.items) == 1
        item = view.items[0]
        assert (item.title, item.body) == ("A", "B")
        assert item.auth_header_line == "Auth Header Used: secret1"

    def test_unauthorized_clears_posts(self, api, service):
        state = BoardState(posts=[Post("old", "post", "x")])
        board = PostBoard(service, state=state)
        api.on("GET", "/list", httpx.Response(401))

        board.set_auth_code("wrong")

        assert state.posts == []
        assert state.list_error == "Unauthorized: Check your Auth Code."
        assert state.is_list_loading is False
        assert board.list_view.message == (
            "Error fetching posts: Unauthorized: Check your Auth Code."
        )

    def test_unknown_error_without_message_uses_fallback(self, api, board):
        def explode(request):
            raise RuntimeError()

        api.on("GET", "/list", explode)

        board.set_auth_code("secret1")

        assert board.state.list_error == LIST_FALLBACK_MESSAGE

    def test_clearing_code_after_load_shows_prompt(self, api, board):
        api.on("GET", "/list", httpx.Response(200, json=SECRET_POSTS))
        board.set_auth_code("secret1")

        board.set_auth_code("")

        assert board.state.posts == []
        assert board.list_view.display is ListDisplay.PROMPT
        assert len(api.calls("GET", "/list")) == 1

    def test_listeners_are_notified(self, api, board):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        seen = []
        unsubscribe = board.subscribe(lambda: seen.append(board.state.is_list_loading))

        board.set_auth_code("secret1")
        unsubscribe()
        board.set_auth_code("secret2")

        assert seen == [True, False]


class TestListSequencing:
    """Une réponse à une requête dépassée ne doit pas écraser un état plus récent."""

    def test_stale_response_is_dropped(self, api, service):
        def respond(request):
            code = request.headers["PinggyAuthHeader"]
            return httpx.Response(
                200, json=[{"title": code, "body": "", "pinggyAuthHeader": code}]
            )

        api.on("GET", "/list", respond)
        runner = ManualRunner()
        board = PostBoard(service, runner=runner)

        board.set_auth_code("old")
        board.set_auth_code("new")
        runner.complete(1)
        runner.complete(0)

        assert [post.title for post in board.state.posts] == ["new"]
        assert board.state.is_list_loading is False

    def test_loading_flag_during_flight(self, api, service):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        runner = ManualRunner()
        board = PostBoard(service, runner=runner)

        board.set_auth_code("secret1")

        assert board.state.is_list_loading is True
        assert board.list_view.display is ListDisplay.LOADING
        runner.complete()
        assert board.list_view.display is ListDisplay.EMPTY

    def test_clearing_code_drops_in_flight_response(self, api, service):
        api.on("GET", "/list", httpx.Response(200, json=SECRET_POSTS))
        runner = ManualRunner()
        board = PostBoard(service, runner=runner)

        board.set_auth_code("secret1")
        board.set_auth_code("")
        runner.complete()

        assert board.state.posts == []
        assert board.list_view.display is ListDisplay.PROMPT


class TestPostForm:
    """Formulaire de création."""

    @pytest.fixture
    def form(self, board):
        return board.create_form()

    @pytest.mark.parametrize(
        ("title", "body", "auth_code"),
        [
            ("", "B", "secret1"),
            ("T", " ", "secret1"),
            ("T", "B", ""),
            ("  ", "\n", "   "),
        ],
    )
    def test_blank_fields_block_submission(self, api, board, title, body, auth_code):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        board.set_auth_code(auth_code)
        form = board.create_form()
        form.set_title(title)
        form.set_body(body)
        before = len(api.requests)

        assert form.submit() is False

        assert len(api.requests) == before
        assert form.state.error == VALIDATION_MESSAGE
        assert form.state.is_submitting is False

    def test_success_clears_fields_and_refreshes_once(self, api, board, form):
        api.on("GET", "/list", httpx.Response(200, json=SECRET_POSTS))
        api.on("POST", "/post", httpx.Response(201))
        board.set_auth_code("secret1")
        form.set_title("T")
        form.set_body("B")
        lists_before = len(api.calls("GET", "/list"))

        assert form.submit() is True

        assert form.state.title == ""
        assert form.state.body == ""
        assert form.state.error is None
        assert form.state.is_submitting is False
        assert board.auth_code == "secret1"
        assert len(api.calls("GET", "/list")) == lists_before + 1
        assert len(api.calls("POST", "/post")) == 1

    def test_unauthorized_keeps_fields(self, api, board, form):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        api.on("POST", "/post", httpx.Response(401))
        board.set_auth_code("wrong")
        form.set_title("T")
        form.set_body("B")
        lists_before = len(api.calls("GET", "/list"))

        form.submit()

        assert form.state.error == "Unauthorized: Check your Auth Code."
        assert (form.state.title, form.state.body) == ("T", "B")
        assert len(api.calls("GET", "/list")) == lists_before

    def test_server_side_rejection(self, api, board, form):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        api.on("POST", "/post", httpx.Response(400, json={"title": "must not be empty"}))
        board.set_auth_code("secret1")
        form.set_title("T")
        form.set_body("B")

        form.submit()

        assert form.state.error == "Bad Request: must not be empty"

    def test_new_submit_clears_previous_error(self, api, board, form):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        api.on("POST", "/post", httpx.Response(201))
        board.set_auth_code("secret1")
        form.submit()
        assert form.state.error == VALIDATION_MESSAGE

        form.set_title("T")
        form.set_body("B")
        form.submit()

        assert form.state.error is None

    def test_unknown_error_without_message_uses_fallback(self, api, board, form):
        def explode(request):
            raise RuntimeError()

        api.on("GET", "/list", httpx.Response(200, json=[]))
        api.on("POST", "/post", explode)
        board.set_auth_code("secret1")
        form.set_title("T")
        form.set_body("B")

        form.submit()

        assert form.state.error == SUBMIT_FALLBACK_MESSAGE

    def test_submitting_flag_during_flight(self, api, service):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        api.on("POST", "/post", httpx.Response(200))
        runner = ManualRunner()
        board = PostBoard(service, runner=runner)
        form = board.create_form()
        board.set_auth_code("secret1")
        runner.complete()
        form.set_title("T")
        form.set_body("B")

        form.submit()

        assert form.state.is_submitting is True
        runner.complete()
        assert form.state.is_submitting is False
        assert board.state.is_list_loading is True

    def test_second_submit_while_in_flight_is_ignored(self, api, service):
        api.on("GET", "/list", httpx.Response(200, json=[]))
        api.on("POST", "/post", httpx.Response(201))
        runner = ManualRunner()
        board = PostBoard(service, runner=runner)
        form = board.create_form()
        board.set_auth_code("secret1")
        runner.complete()
        form.set_title("T")
        form.set_body("B")

        assert form.submit() is True
        assert form.submit() is False

        assert len(runner.pending) == 1
        runner.complete()
        assert len(api.calls("POST", "/post")) == 1
        assert form.state.error is None
