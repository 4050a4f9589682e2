"""
Main entry point for the X/O game.

Launches the window by default. With --no-ui the game runs in the
console, using the same match controller.

Run this script to play X/O against a friend or the computer!
"""

import time

from logic.config import GameConfig
from logic.game_state import Mode
from logic.match_controller import MatchController
from logic.scheduler import ManualScheduler


HELP_TEXT = """Commands:
  0-8        mark that cell
  n          new round (after a round ends)
  r          restart the current round
  reset      reset scores
  mode pvp   two players
  mode pvc   play against the computer
  q          quit"""


class ConsoleGame:
    """
    Console front end.

    The computer's move is scheduled on a ManualScheduler; after each
    command the loop waits out the delay and lets it run.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.scheduler = ManualScheduler()
        self.controller = MatchController(scheduler=self.scheduler, config=config)
        self.is_running = False

    def start(self):
        """Start the game loop."""
        print(HELP_TEXT)
        self.controller.state.print_board()

        self.is_running = True
        while self.is_running:
            self._run_ai_turn()

            try:
                command = input("\n> ").strip().lower()
            except EOFError:
                break

            self.handle_command(command)

    def handle_command(self, command: str):
        """Run a single console command."""
        controller = self.controller

        if command == "q":
            print("\nGame quit by user.")
            self.is_running = False
            return

        if command.isdigit():
            result = controller.request_move(int(command))
            if not result.is_valid:
                print(f"Can't move there: {result.error_message}")
                return
        elif command == "n":
            if not controller.start_new_round():
                print("The round isn't over yet. Use 'r' to restart it.")
                return
        elif command == "r":
            controller.restart_current_round()
        elif command == "reset":
            controller.full_reset()
        elif command.startswith("mode"):
            try:
                controller.set_mode(command.split()[-1])
            except ValueError:
                print("Unknown mode. Use 'mode pvp' or 'mode pvc'.")
                return
            print(f"Mode: {controller.state.mode.value}")
        else:
            print(HELP_TEXT)
            return

        controller.state.print_board()

    def _run_ai_turn(self):
        """Wait for and play a scheduled computer move, if any."""
        delay = self.scheduler.next_due_ms()
        if delay is None:
            return

        print("\n>>> Computer is thinking...")
        time.sleep(delay / 1000.0)
        if self.scheduler.advance(delay):
            self.controller.state.print_board()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="X/O Game")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=GameConfig.DEFAULT_MODE.value,
        help="Start in two-player (pvp) or vs-computer (pvc) mode"
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=GameConfig.AI_MOVE_DELAY_MS,
        help="Pause before the computer's move, in milliseconds"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print rejected moves and AI decisions"
    )

    args = parser.parse_args()

    config = GameConfig()
    config.DEFAULT_MODE = Mode(args.mode)
    config.AI_MOVE_DELAY_MS = args.delay_ms
    config.DEBUG_MODE = args.debug

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   X/O Game UI")
        print("="*60 + "\n")
        ui = TicTacToeUI(game_config=config)
        ui.run()
        return

    game = ConsoleGame(config)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
