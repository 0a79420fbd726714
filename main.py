"""Point d'entrée de l'application PostBoard."""

from __future__ import annotations

from postboard.config import load_config
from postboard.logging_setup import setup_logging
from postboard.services import PostService
from postboard.state import BoardState
from postboard.ui.app import MainWindow


def main() -> None:
    """Initialise les dépendances puis lance l'interface Tkinter."""
    config = load_config()
    setup_logging(config.log_level)
    service = PostService(config)
    state = BoardState()
    app = MainWindow(service=service, config=config, state=state)
    app.run()


if __name__ == "__main__":
    main()
