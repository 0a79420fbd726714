"""Interface Tkinter principale."""

from __future__ import annotations

import tkinter as tk
from tkinter import messagebox, ttk

import sv_ttk

from postboard.config import AppConfig
from postboard.controllers import PostBoard
from postboard.runner import TkTaskRunner
from postboard.services import PostService
from postboard.state import BoardState
from postboard.views import ListDisplay

ACCENT_COLOR = "#4F46E5"
BACKGROUND_COLOR = "#121212"
CARD_COLOR = "#1E1E1E"
STATUS_NEUTRAL_COLOR = "#B3B3B3"
STATUS_ERROR_COLOR = "#F87171"
MONO_FONT = ("Courier", 10)
WINDOW_WIDTH = 760
WINDOW_HEIGHT = 820


class MainWindow:
    """Fenêtre principale : formulaire de création et liste des posts."""

    def __init__(
        self,
        service: PostService,
        config: AppConfig,
        state: BoardState | None = None,
    ) -> None:
        self._config = config

        self.root = tk.Tk()
        self.root.title("PostBoard – Post Management")
        self.root.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.root.minsize(560, 600)

        sv_ttk.set_theme("dark")
        self.root.configure(bg=BACKGROUND_COLOR)
        self._configure_styles()

        self._board = PostBoard(service, state=state, runner=TkTaskRunner(self.root))
        self._form = self._board.create_form()

        self._auth_var = tk.StringVar(value=self._board.auth_code)
        self._title_var = tk.StringVar()
        self._form_error_var = tk.StringVar()
        self._list_message_var = tk.StringVar()

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(1, weight=1)

        self._build_header()
        self._build_main_area()

        self._auth_var.trace_add("write", self._on_auth_var_changed)
        self._title_var.trace_add("write", self._on_title_var_changed)
        self._board.subscribe(self._render_list)
        self._form.subscribe(self._render_form)

        self._render_form()
        self._board.mount()

        if not self._config.api_url_is_configured():
            messagebox.showwarning(
                "Missing configuration",
                "POSTBOARD_API_URL is not set; requests to the post service will fail.",
            )

    # --------------------------------------------------------------------- UI -
    def _configure_styles(self) -> None:
        style = ttk.Style()
        style.configure("Main.TFrame", background=BACKGROUND_COLOR)
        style.configure("Card.TFrame", background=CARD_COLOR)
        style.configure(
            "HeaderTitle.TLabel",
            background=BACKGROUND_COLOR,
            foreground="#FFFFFF",
            font=("Helvetica", 20, "bold"),
        )
        style.configure(
            "Section.TLabel",
            background=CARD_COLOR,
            foreground="#FFFFFF",
            font=("Helvetica", 13, "bold"),
        )
        style.configure(
            "Field.TLabel",
            background=CARD_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 10),
        )
        style.configure(
            "Hint.TLabel",
            background=CARD_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 9),
        )
        style.configure(
            "Error.TLabel",
            background=CARD_COLOR,
            foreground=STATUS_ERROR_COLOR,
            font=("Helvetica", 11),
        )
        style.configure(
            "Status.TLabel",
            background=CARD_COLOR,
            foreground=STATUS_NEUTRAL_COLOR,
            font=("Helvetica", 11),
        )
        style.configure("Accent.TButton", font=("Helvetica", 11, "bold"))
        style.configure("TButton", padding=(16, 8))
        style.map("TButton", background=[("disabled", "#2B2B2B")])
        self.root.option_add("*Font", "Helvetica 11")

    def _build_header(self) -> None:
        frame = ttk.Frame(self.root, style="Main.TFrame", padding=(24, 16, 24, 0))
        frame.grid(row=0, column=0, sticky="ew")
        ttk.Label(frame, text="Post Management", style="HeaderTitle.TLabel").pack()

    def _build_main_area(self) -> None:
        main_frame = ttk.Frame(self.root, padding=(24, 16, 24, 16), style="Main.TFrame")
        main_frame.grid(row=1, column=0, sticky="nsew")
        main_frame.columnconfigure(0, weight=1)
        main_frame.rowconfigure(1, weight=1)

        self._build_form_section(main_frame)
        self._build_list_section(main_frame)

    def _build_form_section(self, parent: tk.Misc) -> None:
        frame = ttk.Frame(parent, style="Card.TFrame", padding=(20, 18))
        frame.grid(row=0, column=0, sticky="ew")
        frame.columnconfigure(0, weight=1)

        ttk.Label(frame, text="Create New Post", style="Section.TLabel").grid(
            row=0, column=0, sticky="w"
        )

        self._form_error_label = ttk.Label(
            frame,
            textvariable=self._form_error_var,
            style="Error.TLabel",
            wraplength=WINDOW_WIDTH - 120,
        )
        self._form_error_label.grid(row=1, column=0, sticky="ew", pady=(8, 0))

        ttk.Label(frame, text="Auth Code (Header)", style="Field.TLabel").grid(
            row=2, column=0, sticky="w", pady=(12, 2)
        )
        auth_entry = ttk.Entry(frame, textvariable=self._auth_var)
        auth_entry.grid(row=3, column=0, sticky="ew", ipady=4)
        auth_entry.focus()
        ttk.Label(
            frame,
            text="Required for submitting and viewing posts.",
            style="Hint.TLabel",
        ).grid(row=4, column=0, sticky="w", pady=(2, 0))

        ttk.Label(frame, text="Title", style="Field.TLabel").grid(
            row=5, column=0, sticky="w", pady=(12, 2)
        )
        title_entry = ttk.Entry(frame, textvariable=self._title_var)
        title_entry.grid(row=6, column=0, sticky="ew", ipady=4)
        title_entry.bind("<Return>", lambda _: self.submit_post())

        ttk.Label(frame, text="Body", style="Field.TLabel").grid(
            row=7, column=0, sticky="w", pady=(12, 2)
        )
        self._body_text = tk.Text(
            frame,
            height=4,
            wrap=tk.WORD,
            bg=BACKGROUND_COLOR,
            fg="#FFFFFF",
            insertbackground="#FFFFFF",
            relief=tk.FLAT,
            highlightthickness=1,
        )
        self._body_text.grid(row=8, column=0, sticky="ew")

        self._submit_button = ttk.Button(
            frame,
            text="Submit Post",
            command=self.submit_post,
            style="Accent.TButton",
        )
        self._submit_button.grid(row=9, column=0, sticky="ew", pady=(16, 0))

    def _build_list_section(self, parent: tk.Misc) -> None:
        frame = ttk.Frame(parent, style="Card.TFrame", padding=(20, 18))
        frame.grid(row=1, column=0, sticky="nsew", pady=(20, 0))
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(2, weight=1)

        ttk.Label(frame, text="Existing Posts", style="Section.TLabel").grid(
            row=0, column=0, sticky="w"
        )

        self._list_message_label = ttk.Label(
            frame,
            textvariable=self._list_message_var,
            style="Status.TLabel",
            anchor="center",
            wraplength=WINDOW_WIDTH - 120,
        )
        self._list_message_label.grid(row=1, column=0, sticky="ew", pady=(12, 0))

        list_container = ttk.Frame(frame, style="Card.TFrame")
        list_container.grid(row=2, column=0, sticky="nsew", pady=(12, 0))
        list_container.columnconfigure(0, weight=1)
        list_container.rowconfigure(0, weight=1)

        self._posts_text = tk.Text(
            list_container,
            wrap=tk.WORD,
            bg=CARD_COLOR,
            fg="#FFFFFF",
            relief=tk.FLAT,
            borderwidth=0,
            highlightthickness=0,
            state=tk.DISABLED,
        )
        self._posts_text.grid(row=0, column=0, sticky="nsew")
        self._posts_text.tag_configure("title", font=("Helvetica", 13, "bold"))
        self._posts_text.tag_configure("body", foreground="#E5E5E5")
        self._posts_text.tag_configure(
            "header", font=MONO_FONT, foreground=STATUS_NEUTRAL_COLOR
        )

        scrollbar = ttk.Scrollbar(
            list_container,
            orient=tk.VERTICAL,
            command=self._posts_text.yview,
        )
        scrollbar.grid(row=0, column=1, sticky="ns")
        self._posts_text.configure(yscrollcommand=scrollbar.set)

    def _on_auth_var_changed(self, *_: object) -> None:
        self._board.set_auth_code(self._auth_var.get())

    def _on_title_var_changed(self, *_: object) -> None:
        self._form.set_title(self._title_var.get())

    # ---------------------------------------------------------------- Rendu -
    def _render_form(self) -> None:
        state = self._form.state
        self._form_error_var.set(state.error or "")

        if self._title_var.get() != state.title:
            self._title_var.set(state.title)
        if self._body_text.get("1.0", "end-1c") != state.body:
            self._body_text.delete("1.0", tk.END)
            self._body_text.insert("1.0", state.body)

        if state.is_submitting:
            self._submit_button.configure(text="Submitting...", state=tk.DISABLED)
        else:
            self._submit_button.configure(text="Submit Post", state=tk.NORMAL)

    def _render_list(self) -> None:
        view = self._board.list_view
        is_error = view.display is ListDisplay.ERROR
        self._list_message_label.configure(
            foreground=STATUS_ERROR_COLOR if is_error else STATUS_NEUTRAL_COLOR
        )
        self._list_message_var.set(view.message)

        self._posts_text.configure(state=tk.NORMAL)
        self._posts_text.delete("1.0", tk.END)
        for item in view.items:
            self._posts_text.insert(tk.END, f"{item.title}\n", "title")
            self._posts_text.insert(tk.END, f"{item.body}\n", "body")
            self._posts_text.insert(tk.END, f"{item.auth_header_line}\n\n", "header")
        self._posts_text.configure(state=tk.DISABLED)

    # --------------------------------------------------------------- Callbacks -
    def submit_post(self) -> None:
        self._form.set_title(self._title_var.get())
        self._form.set_body(self._body_text.get("1.0", "end-1c"))
        self._form.submit()

    # ----------------------------------------------------------------- Public -
    def run(self) -> None:
        self.root.mainloop()
