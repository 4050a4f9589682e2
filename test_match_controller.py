"""Tests for the match controller: rounds, scores, modes and the delayed AI move."""

import random

import pytest

from logic.config import GameConfig
from logic.game_state import Board, Mode, OutcomeStatus, Player, Scoreboard
from logic.match_controller import MatchController
from logic.move_validator import RejectReason
from logic.scheduler import ManualScheduler


DELAY = GameConfig.AI_MOVE_DELAY_MS

# Whoever moves first takes row 0
STARTER_WINS = [0, 3, 1, 4, 2]

# X: 0 2 3 7 8, O: 1 4 5 6 - no line
DRAW_GAME = [0, 1, 2, 4, 3, 5, 7, 6, 8]


class IgnoresCancelScheduler(ManualScheduler):
    """A scheduler whose cancel() does nothing, so stale callbacks still fire."""

    def cancel(self, token):
        pass


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def controller(scheduler):
    return MatchController(scheduler=scheduler)


@pytest.fixture
def pvc(scheduler):
    controller = MatchController(scheduler=scheduler)
    controller.set_mode(Mode.PVC)
    return controller


def play(controller, moves):
    for index in moves:
        result = controller.request_move(index)
        assert result.is_valid, result.error_message


class TestInitialState:
    def test_fresh_match(self, controller):
        state = controller.state
        assert state.board == Board()
        assert state.current_player == Player.X
        assert state.outcome.status == OutcomeStatus.IN_PROGRESS
        assert state.mode == Mode.PVP
        assert state.scoreboard == Scoreboard()
        assert state.next_round_starting_player == Player.X
        assert not controller.ai_pending

    def test_default_scheduler(self):
        controller = MatchController()
        assert isinstance(controller.scheduler, ManualScheduler)


class TestApplyMove:
    def test_accepted_move_changes_one_cell(self, controller):
        before = controller.state.board
        result = controller.apply_move(4, Player.X)

        assert result.is_valid
        after = controller.state.board
        changed = [i for i in range(9) if before[i] != after[i]]
        assert changed == [4]
        assert after[4] == Player.X
        assert controller.state.current_player == Player.O

    def test_move_history(self, controller):
        play(controller, [4, 0])
        moves = controller.state.moves
        assert [(m.player, m.index, m.move_number) for m in moves] == [
            (Player.X, 4, 0),
            (Player.O, 0, 1),
        ]

    @pytest.mark.parametrize("index, player, reason", [
        (9, Player.X, RejectReason.INVALID_INDEX),
        (-1, Player.X, RejectReason.INVALID_INDEX),
        (4, Player.X, RejectReason.CELL_OCCUPIED),
        (0, Player.X, RejectReason.NOT_YOUR_TURN),
    ])
    def test_rejections_leave_state_alone(self, controller, index, player, reason):
        controller.apply_move(4, Player.X)
        before = controller.state
        generation = controller.generation

        for _ in range(2):
            result = controller.apply_move(index, player)
            assert result.reason == reason
            assert controller.state is before
            assert controller.generation == generation

    def test_x_wins_top_row(self, controller):
        play(controller, [0, 4, 1, 5, 2])

        outcome = controller.state.outcome
        assert outcome.winner == Player.X
        assert outcome.line == (0, 1, 2)
        assert controller.state.scoreboard == Scoreboard(x_wins=1)
        assert controller.state.status_text == "Winner: X"

    def test_no_moves_after_win(self, controller):
        play(controller, [0, 4, 1, 5, 2])
        state = controller.state

        result = controller.request_move(8)
        assert result.reason == RejectReason.ROUND_ALREADY_OVER
        assert controller.state is state
        # The turn doesn't pass after the winning move
        assert state.current_player == Player.X

    def test_draw(self, controller):
        play(controller, DRAW_GAME)

        assert controller.state.outcome.is_draw
        assert controller.state.scoreboard == Scoreboard(draws=1)
        assert controller.state.status_text == "Draw!"
        assert controller.get_valid_moves() == []

    def test_o_win_counts_for_o(self, controller):
        play(controller, [4, 0, 8, 1, 5, 2])
        assert controller.state.outcome.winner == Player.O
        assert controller.state.scoreboard == Scoreboard(o_wins=1)


class TestRounds:
    def test_new_round_ignored_mid_round(self, controller):
        controller.request_move(0)
        state = controller.state

        assert controller.start_new_round() is False
        assert controller.state is state

    def test_new_round_keeps_score_and_mode(self, controller):
        play(controller, STARTER_WINS)

        assert controller.start_new_round() is True
        state = controller.state
        assert state.board == Board()
        assert state.outcome.status == OutcomeStatus.IN_PROGRESS
        assert state.scoreboard == Scoreboard(x_wins=1)
        assert state.mode == Mode.PVP
        assert state.moves == ()

    def test_starting_player_alternates(self, controller):
        starters = [controller.state.current_player]
        for _ in range(5):
            # Alternate who wins, the starter must not depend on it
            play(controller, STARTER_WINS)
            controller.start_new_round()
            starters.append(controller.state.current_player)

        assert starters == [Player.X, Player.X, Player.O, Player.X, Player.O, Player.X]
        assert controller.state.scoreboard == Scoreboard(x_wins=3, o_wins=2)

    def test_restart_resumes_with_round_starter(self, controller):
        for _ in range(2):
            play(controller, STARTER_WINS)
            controller.start_new_round()
        assert controller.state.current_player == Player.O

        play(controller, [0, 4])
        controller.restart_current_round()

        state = controller.state
        assert state.board == Board()
        assert state.current_player == Player.O
        assert state.scoreboard == Scoreboard(x_wins=2)
        assert state.next_round_starting_player == Player.X

    def test_restart_does_not_advance_alternation(self, controller):
        controller.restart_current_round()
        controller.restart_current_round()
        play(controller, STARTER_WINS)
        controller.start_new_round()
        assert controller.state.current_player == Player.X

        play(controller, STARTER_WINS)
        controller.start_new_round()
        assert controller.state.current_player == Player.O

    def test_restart_after_finished_round_keeps_score(self, controller):
        play(controller, DRAW_GAME)
        controller.restart_current_round()
        assert controller.state.scoreboard == Scoreboard(draws=1)
        assert controller.state.current_player == Player.X

    def test_full_reset(self, controller):
        play(controller, STARTER_WINS)
        controller.start_new_round()
        controller.request_move(4)

        controller.full_reset()

        state = controller.state
        assert state.board == Board()
        assert state.scoreboard == Scoreboard()
        assert state.current_player == Player.X
        assert state.next_round_starting_player == Player.X
        assert state.mode == Mode.PVP

        play(controller, STARTER_WINS)
        controller.start_new_round()
        assert controller.state.current_player == Player.X

    def test_full_reset_restarts_alternation(self, controller):
        play(controller, STARTER_WINS)
        controller.start_new_round()
        assert controller.state.next_round_starting_player == Player.O

        controller.full_reset()
        play(controller, STARTER_WINS)
        controller.start_new_round()
        assert controller.state.current_player == Player.X

        play(controller, STARTER_WINS)
        controller.start_new_round()
        assert controller.state.current_player == Player.O


class TestModes:
    def test_set_mode_accepts_strings(self, controller):
        controller.set_mode("pvc")
        assert controller.state.mode == Mode.PVC
        controller.set_mode("pvp")
        assert controller.state.mode == Mode.PVP

    def test_set_unknown_mode(self, controller):
        with pytest.raises(ValueError):
            controller.set_mode("online")

    def test_same_mode_is_a_no_op(self, controller):
        calls = []
        controller.add_listener(calls.append)
        controller.set_mode(Mode.PVP)
        assert calls == []


class TestComputerTurn:
    def test_ai_answers_corner_with_center(self, pvc, scheduler):
        pvc.request_move(0)

        assert pvc.ai_pending
        assert pvc.state.board[4] is None

        scheduler.advance(DELAY - 1)
        assert pvc.state.board[4] is None

        scheduler.advance(1)
        assert pvc.state.board[4] == Player.O
        assert pvc.state.current_player == Player.X
        assert not pvc.ai_pending

    def test_human_cannot_move_on_ai_turn(self, pvc, scheduler):
        pvc.request_move(0)
        state = pvc.state

        result = pvc.request_move(1)
        assert result.reason == RejectReason.NOT_YOUR_TURN
        assert pvc.state is state
        assert pvc.ai_pending

        result = pvc.apply_move(1, Player.O)
        assert result.reason == RejectReason.NOT_YOUR_TURN
        assert pvc.state is state

    def test_ai_blocks(self, pvc, scheduler):
        pvc.request_move(0)
        scheduler.advance(DELAY)        # O takes 4
        pvc.request_move(1)
        scheduler.advance(DELAY)
        assert pvc.state.board[2] == Player.O

    def test_ai_wins_and_scores(self, pvc, scheduler):
        # O takes the center, blocks at 2, then finishes 2-4-6
        pvc.request_move(0)
        scheduler.advance(DELAY)        # O center
        pvc.request_move(1)
        scheduler.advance(DELAY)        # O blocks 2
        pvc.request_move(8)
        scheduler.advance(DELAY)        # O wins at 6

        outcome = pvc.state.outcome
        assert outcome.winner == Player.O
        assert outcome.line == (2, 4, 6)
        assert pvc.state.scoreboard == Scoreboard(o_wins=1)
        assert not pvc.ai_pending

    def test_no_ai_move_after_round_ends(self, pvc, scheduler):
        pvc.set_mode(Mode.PVP)
        play(pvc, [4, 0, 8, 1, 5, 2])    # O wins, O stays "to move"
        pvc.set_mode(Mode.PVC)
        assert not pvc.ai_pending

    @pytest.mark.parametrize("command", [
        lambda c: c.full_reset(),
        lambda c: c.restart_current_round(),
        lambda c: c.set_mode(Mode.PVP),
    ])
    def test_commands_cancel_pending_move(self, pvc, scheduler, command):
        pvc.request_move(0)
        assert pvc.ai_pending

        command(pvc)

        assert not pvc.ai_pending
        assert scheduler.pending == 0
        board = pvc.state.board
        scheduler.advance(DELAY * 10)
        assert pvc.state.board == board

    def test_stale_callback_is_ignored(self):
        scheduler = IgnoresCancelScheduler()
        controller = MatchController(scheduler=scheduler)
        controller.set_mode(Mode.PVC)
        controller.request_move(0)

        controller.restart_current_round()
        scheduler.advance(DELAY)

        assert controller.state.board == Board()
        assert controller.state.current_player == Player.X

    def test_only_latest_callback_plays(self):
        scheduler = IgnoresCancelScheduler()
        controller = MatchController(scheduler=scheduler)
        controller.set_mode(Mode.PVC)
        controller.request_move(0)
        controller.set_mode(Mode.PVP)
        controller.set_mode(Mode.PVC)

        scheduler.run_pending()

        marks = [cell for cell in controller.state.board if cell == Player.O]
        assert len(marks) == 1

    def test_switching_to_pvc_on_o_turn_schedules_ai(self, controller, scheduler):
        controller.request_move(0)
        controller.set_mode(Mode.PVC)

        assert controller.ai_pending
        scheduler.advance(DELAY)
        assert controller.state.board[4] == Player.O

    def test_ai_starts_round_when_it_is_the_starter(self, pvc, scheduler):
        # X starts the first two rounds, O the third
        for _ in range(2):
            for index in (0, 1, 8):
                pvc.request_move(index)
                scheduler.advance(DELAY)
            assert pvc.state.outcome.winner == Player.O
            pvc.start_new_round()

        assert pvc.state.scoreboard == Scoreboard(o_wins=2)
        assert pvc.state.current_player == Player.O
        assert pvc.ai_pending

        scheduler.advance(DELAY)
        assert pvc.state.board[4] == Player.O
        assert pvc.state.current_player == Player.X

    def test_computer_playing_x_opens(self):
        class ComputerFirst(GameConfig):
            AI_PLAYER = Player.X
            DEFAULT_MODE = Mode.PVC

        scheduler = ManualScheduler()
        controller = MatchController(scheduler=scheduler, config=ComputerFirst())
        assert controller.ai_pending

        scheduler.advance(ComputerFirst.AI_MOVE_DELAY_MS)
        assert controller.state.board[4] == Player.X
        assert controller.state.current_player == Player.O

    def test_custom_delay(self):
        config = GameConfig()
        config.AI_MOVE_DELAY_MS = 0
        scheduler = ManualScheduler()
        controller = MatchController(scheduler=scheduler, config=config)
        controller.set_mode(Mode.PVC)
        controller.request_move(4)

        scheduler.advance(0)
        assert controller.state.board[0] == Player.O


class TestListeners:
    def test_called_after_each_change(self, controller):
        seen = []
        controller.add_listener(seen.append)

        controller.request_move(4)
        controller.request_move(4)     # rejected, no notification
        controller.restart_current_round()

        assert len(seen) == 2
        assert seen[0].board[4] == Player.X
        assert seen[1].board == Board()

    def test_ai_move_notifies(self, pvc, scheduler):
        seen = []
        pvc.add_listener(seen.append)
        pvc.request_move(0)
        scheduler.advance(DELAY)
        assert [s.current_player for s in seen] == [Player.O, Player.X]

    def test_remove_listener(self, controller):
        seen = []
        controller.add_listener(seen.append)
        controller.remove_listener(seen.append)
        controller.request_move(0)
        assert seen == []

    def test_command_from_listener_never_delivers_an_older_state(self, controller):
        def answer_first_move(state):
            if len(state.moves) == 1:
                controller.request_move(0)

        seen = []
        controller.add_listener(answer_first_move)
        controller.add_listener(seen.append)

        controller.request_move(4)

        assert [len(s.moves) for s in seen] == [2]
        assert seen[-1] is controller.state


def test_debug_output(capsys):
    config = GameConfig()
    config.DEBUG_MODE = True
    controller = MatchController(config=config)
    controller.request_move(0)
    controller.request_move(0)

    out = capsys.readouterr().out
    assert "X -> 0" in out
    assert "Move rejected (cell_occupied)" in out


@pytest.mark.parametrize("seed", range(20))
def test_random_sessions_keep_invariants(seed):
    """Scores always add up to the finished rounds, whatever the command mix."""
    rng = random.Random(seed)
    scheduler = ManualScheduler()
    controller = MatchController(scheduler=scheduler)
    completed = 0

    for _ in range(300):
        roll = rng.random()
        before = controller.state

        if roll < 0.70:
            result = controller.request_move(rng.randrange(-1, 10))
            if result.is_valid:
                after = controller.state
                changed = [i for i in range(9) if before.board[i] != after.board[i]]
                assert changed == [after.moves[-1].index]
                assert after.board[changed[0]] == before.current_player
        elif roll < 0.80:
            controller.start_new_round()
        elif roll < 0.85:
            controller.restart_current_round()
        elif roll < 0.88:
            controller.full_reset()
            completed = 0
        elif roll < 0.94:
            controller.set_mode(rng.choice(list(Mode)))
        else:
            scheduler.advance(rng.choice([0, DELAY // 2, DELAY]))

        if controller.state.outcome.is_terminal and controller.state is not before \
                and not before.outcome.is_terminal:
            completed += 1

        state = controller.state
        assert state.scoreboard.total == completed
        assert controller.ai_pending == state.is_ai_turn
        if state.outcome.is_draw:
            assert state.board.is_full()
        if state.outcome.is_win:
            assert all(state.board[i] == state.outcome.winner for i in state.outcome.line)
