"""Exécution des requêtes et retour du résultat vers l'appelant.

Les contrôleurs ne modifient leur état que depuis le fil de l'appelant :
``ImmediateRunner`` exécute le travail sur place, ``TkTaskRunner`` l'exécute dans un
thread et rapatrie le résultat dans la boucle Tk.
"""

from __future__ import annotations

import queue
import threading
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    import tkinter as tk

Work = Callable[[], Any]
Done = Callable[[Any, "BaseException | None"], None]

POLL_INTERVAL_MS = 50


class TaskRunner(Protocol):
    def submit(self, work: Work, on_done: Done) -> None: ...


def _execute(work: Work) -> tuple[Any, BaseException | None]:
    try:
        return work(), None
    except Exception as exc:  # noqa: BLE001
        return None, exc


class ImmediateRunner:
    """Exécute le travail de manière synchrone."""

    def submit(self, work: Work, on_done: Done) -> None:
        result, error = _execute(work)
        on_done(result, error)


class TkTaskRunner:
    """Exécute le travail en arrière-plan et notifie dans la boucle principale."""

    def __init__(self, root: tk.Misc) -> None:
        self._root = root
        self._results: queue.Queue[tuple[Done, Any, BaseException | None]] = queue.Queue()
        self._root.after(POLL_INTERVAL_MS, self._poll)

    def submit(self, work: Work, on_done: Done) -> None:
        def target() -> None:
            result, error = _execute(work)
            self._results.put((on_done, result, error))

        threading.Thread(target=target, daemon=True).start()

    def _poll(self) -> None:
        while True:
            try:
                on_done, result, error = self._results.get_nowait()
            except queue.Empty:
                break
            on_done(result, error)
        self._root.after(POLL_INTERVAL_MS, self._poll)
