"""
X/O Game UI
A graphical interface for the X/O game using Tkinter.

Shows:
- The board (click a cell to move)
- Game mode selection (two players / vs computer)
- Score with a full reset
- Game status
- New round / restart round
"""

import tkinter as tk
from tkinter import ttk
from PIL import ImageTk
from typing import Optional

from logic.config import GameConfig
from logic.game_state import MatchState, Mode
from logic.match_controller import MatchController
from logic.scheduler import TkScheduler
from view.board_renderer import BoardRenderer
from view.config import ViewConfig


class TicTacToeUI:
    """
    Main UI class for the X/O game.
    """

    def __init__(
        self,
        game_config: Optional[GameConfig] = None,
        view_config: Optional[ViewConfig] = None
    ):
        """Initialize the UI."""
        self.view_config = view_config or ViewConfig()
        self.renderer = BoardRenderer(self.view_config)
        self._photo = None

        # Create UI first - the scheduler needs the root window
        self._create_ui()

        self.controller = MatchController(
            scheduler=TkScheduler(self.root),
            config=game_config
        )
        self.controller.add_listener(self._on_state_change)
        self._on_state_change(self.controller.state)

    def _create_ui(self):
        """Create the Tkinter UI."""
        cfg = self.view_config

        self.root = tk.Tk()
        self.root.title(cfg.WINDOW_TITLE)
        self.root.configure(bg=cfg.WINDOW_BG)
        self.root.resizable(False, False)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=cfg.WINDOW_BG)
        style.configure('TLabel', background=cfg.WINDOW_BG, foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground=cfg.TITLE_FG)
        style.configure('Status.TLabel', font=('Segoe UI', 12, 'bold'), foreground=cfg.STATUS_FG)

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=15, pady=15)

        ttk.Label(main_frame, text="X/O Game", style='Title.TLabel').pack(pady=(0, 10))

        # Mode selection
        mode_frame = ttk.Frame(main_frame)
        mode_frame.pack(pady=5)

        self.mode_buttons = {}
        for text, mode in (("Two Players", Mode.PVP), ("Vs Computer", Mode.PVC)):
            btn = tk.Button(
                mode_frame,
                text=text,
                font=('Segoe UI', 10, 'bold'),
                width=12,
                bg=cfg.BUTTON_BG,
                fg='white',
                command=lambda m=mode: self.controller.set_mode(m)
            )
            btn.pack(side=tk.LEFT, padx=5)
            self.mode_buttons[mode] = btn

        # Score
        score_frame = ttk.Frame(main_frame)
        score_frame.pack(pady=5)

        self.score_label = ttk.Label(score_frame, text="X: 0   O: 0   = : 0")
        self.score_label.pack(side=tk.LEFT, padx=(0, 10))

        tk.Button(
            score_frame,
            text="Reset",
            font=('Segoe UI', 9),
            bg=cfg.BUTTON_BG,
            fg='white',
            command=self._full_reset
        ).pack(side=tk.LEFT)

        # Status
        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=10)

        # Board canvas
        size = cfg.BOARD_OUTPUT_SIZE
        self.board_canvas = tk.Canvas(
            main_frame, width=size, height=size, bg=cfg.WINDOW_BG,
            highlightthickness=2, highlightbackground=cfg.TITLE_FG
        )
        self.board_canvas.pack()
        self.board_canvas.bind("<Button-1>", self._on_click)

        # Round buttons
        control_frame = ttk.Frame(main_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="New Round",
            font=('Segoe UI', 11, 'bold'),
            bg='#10b981',
            fg='white',
            width=14,
            command=self._new_round
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="Restart Round",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=14,
            command=self._restart_round
        ).pack(side=tk.LEFT, padx=5)

        ttk.Label(
            main_frame,
            text="Starting player alternates between new rounds. X starts after a reset."
        ).pack(pady=(5, 0))

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _on_click(self, event):
        """Forward a board click as a move request."""
        state = self.controller.state
        if state.outcome.is_terminal or state.is_ai_turn:
            return

        index = self.renderer.cell_at(event.x, event.y)
        if index is None:
            return

        self.controller.request_move(index)

    def _new_round(self):
        if not self.controller.start_new_round():
            print("Finish the current round first (or use Restart Round).")

    def _restart_round(self):
        print("Restarting round...")
        self.controller.restart_current_round()

    def _full_reset(self):
        print("Resetting match...")
        self.controller.full_reset()

    def _on_state_change(self, state: MatchState):
        """Redraw everything from the new state."""
        cfg = self.view_config

        image = self.renderer.render(state)
        self._photo = ImageTk.PhotoImage(image)  # Keep reference
        self.board_canvas.delete("all")
        self.board_canvas.create_image(0, 0, anchor=tk.NW, image=self._photo)

        if state.outcome.is_win:
            color = cfg.WIN_STATUS_FG
        elif state.outcome.is_draw:
            color = cfg.DRAW_STATUS_FG
        else:
            color = cfg.STATUS_FG
        status = state.status_text
        if state.is_ai_turn:
            status += " (computer)"
        self.status_label.configure(text=status, foreground=color)

        score = state.scoreboard
        self.score_label.configure(text=f"X: {score.x_wins}   O: {score.o_wins}   = : {score.draws}")

        for mode, btn in self.mode_buttons.items():
            if mode == state.mode:
                btn.configure(bg=cfg.ACTIVE_BUTTON_BG, fg='black')
            else:
                btn.configure(bg=cfg.BUTTON_BG, fg='white')

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()
