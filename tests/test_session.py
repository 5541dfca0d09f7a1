"""Tests for Session scene flow, input routing and collaborator dispatch."""

import pytest

from heartmaze.common.errors import ConfigurationError
from heartmaze.game.session import Scene, Session
from heartmaze.game.state import Direction, MoveStatus
from heartmaze.maze_gen.generator import WALL, shortest_path


class Recorder:
    def __init__(self, session):
        self.cues = []
        self.renders = 0
        self.scenes = []
        session.on_cue(self.cues.append)
        session.on_render(self._render)
        session.on_scene(self.scenes.append)

    def _render(self, state):
        self.renders += 1


def _in_game(seed=1, difficulty="easy"):
    s = Session(difficulty, seed=seed)
    rec = Recorder(s)
    s.accept()
    s.enter_game()
    return s, rec


def _keys_to_goal(state):
    path = shortest_path(state.grid, state.position, state.goal)
    keys = {(0, -1): "ArrowUp", (0, 1): "s", (-1, 0): "A", (1, 0): "ArrowRight"}
    return [keys[(x1 - x0, y1 - y0)] for (x0, y0), (x1, y1) in zip(path, path[1:])]


def _open_key(state):
    x, y = state.position
    for key, d in (("ArrowUp", Direction.UP), ("ArrowDown", Direction.DOWN),
                   ("ArrowLeft", Direction.LEFT), ("ArrowRight", Direction.RIGHT)):
        if state.grid[y + d.dy, x + d.dx] != WALL:
            return key
    raise AssertionError("player boxed in")


class TestSceneFlow:
    def test_starts_on_intro(self):
        assert Session().scene is Scene.INTRO

    def test_accept_moves_to_transition_with_chime_and_love(self):
        s = Session(seed=1)
        rec = Recorder(s)
        s.accept()
        assert s.scene is Scene.TRANSITION
        assert rec.cues == ["chime", "love"]
        assert rec.scenes == [Scene.TRANSITION]

    def test_accept_only_from_intro(self):
        s, rec = _in_game()
        s.accept()
        assert s.scene is Scene.GAME
        assert rec.cues == ["chime", "love"]

    def test_enter_game_renders_fresh_board(self):
        s, rec = _in_game()
        assert s.scene is Scene.GAME
        assert rec.renders == 1
        assert s.state.move_count == 0

    def test_enter_game_uses_session_seed(self):
        a, _ = _in_game(seed=77, difficulty="hard")
        b, _ = _in_game(seed=77, difficulty="hard")
        assert (a.state.grid == b.state.grid).all()


class TestInput:
    def test_keys_ignored_outside_game(self):
        s = Session(seed=1)
        assert s.handle_key("ArrowDown") is None
        assert s.handle_key("d") is None
        assert s.state.move_count == 0

    def test_unknown_key_ignored(self):
        s, _ = _in_game()
        assert s.handle_key("x") is None

    @pytest.mark.parametrize("key", ["ArrowUp", "w", "W"])
    def test_up_keys_hit_top_border(self, key):
        s, rec = _in_game()
        res = s.handle_key(key)
        assert res.status is MoveStatus.BLOCKED
        assert rec.cues == ["chime", "love"]
        assert rec.renders == 1

    def test_move_emits_click_and_render(self):
        s, rec = _in_game(seed=3)
        res = s.handle_key(_open_key(s.state))
        assert res.status is MoveStatus.MOVED
        assert rec.cues[-1] == "click"
        assert rec.renders == 2

    def test_buttons_map_to_moves(self):
        s, _ = _in_game(seed=3)
        assert s.press_button("up").status is MoveStatus.BLOCKED
        assert s.press_button("left").status is MoveStatus.BLOCKED
        assert s.press_button("diagonal") is None

    def test_buttons_ignored_outside_game(self):
        s = Session(seed=3)
        assert s.press_button("down") is None
        s.accept()
        assert s.press_button("right") is None
        assert s.state.move_count == 0


class TestWinDispatch:
    def test_win_plays_cue_and_switches_scene(self):
        s, rec = _in_game(seed=4)
        results = [s.handle_key(k) for k in _keys_to_goal(s.state)]
        assert results[-1].status is MoveStatus.WON
        assert rec.cues[-1] == "win"
        assert s.scene is Scene.WIN
        assert rec.scenes[-1] is Scene.WIN

    def test_input_after_win_is_inert(self):
        s, rec = _in_game(seed=4)
        for k in _keys_to_goal(s.state):
            s.handle_key(k)
        cues, renders = list(rec.cues), rec.renders
        assert s.move(Direction.LEFT).status is MoveStatus.ALREADY_WON
        assert rec.cues == cues
        assert rec.renders == renders

    def test_play_again_resets_and_returns_to_game(self):
        s, rec = _in_game(seed=4)
        for k in _keys_to_goal(s.state):
            s.handle_key(k)
        s.play_again()
        assert s.scene is Scene.GAME
        assert s.state.won is False
        assert s.state.move_count == 0


class TestSettings:
    def test_set_difficulty_resets_board(self):
        s, rec = _in_game()
        s.set_difficulty("hard")
        assert s.state.difficulty == "hard"
        assert s.state.grid.shape == (17, 17)
        assert rec.renders == 2

    def test_new_maze_keeps_difficulty(self):
        s, _ = _in_game(difficulty="medium")
        s.new_maze()
        assert s.state.difficulty == "medium"

    def test_mute_suppresses_cues(self):
        s, rec = _in_game(seed=3)
        assert s.toggle_mute() is True
        s.handle_key(_open_key(s.state))
        assert rec.cues == ["chime", "love"]
        assert s.toggle_mute() is False


class TestNewBoardAfterWin:
    def _won(self, seed=1):
        s, rec = _in_game(seed=seed)
        for k in _keys_to_goal(s.state):
            s.handle_key(k)
        assert s.scene is Scene.WIN
        return s, rec

    def test_difficulty_change_after_win_is_playable(self):
        s, rec = self._won()
        s.set_difficulty("medium")
        assert s.scene is Scene.GAME
        assert rec.scenes[-1] is Scene.GAME
        assert s.state.won is False
        res = s.handle_key(_open_key(s.state))
        assert res.status is MoveStatus.MOVED
        assert s.state.move_count == 1

    def test_new_maze_after_win_is_playable(self):
        s, _ = self._won(seed=2)
        s.new_maze()
        assert s.scene is Scene.GAME
        res = s.handle_key(_open_key(s.state))
        assert res.status is MoveStatus.MOVED

    def test_bad_difficulty_after_win_keeps_win_scene(self):
        s, _ = self._won()
        with pytest.raises(ConfigurationError):
            s.set_difficulty("extreme")
        assert s.scene is Scene.WIN
        assert s.state.won is True
