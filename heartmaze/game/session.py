import logging
from enum import Enum
from typing import Callable, List, Optional

from heartmaze.game.state import Direction, GameState, MoveResult, MoveStatus

logger = logging.getLogger(__name__)


class Scene(str, Enum):
    INTRO = 'intro'
    TRANSITION = 'transition'
    GAME = 'game'
    WIN = 'win'


KEY_BINDINGS = {
    'ArrowUp': Direction.UP, 'w': Direction.UP, 'W': Direction.UP,
    'ArrowDown': Direction.DOWN, 's': Direction.DOWN, 'S': Direction.DOWN,
    'ArrowLeft': Direction.LEFT, 'a': Direction.LEFT, 'A': Direction.LEFT,
    'ArrowRight': Direction.RIGHT, 'd': Direction.RIGHT, 'D': Direction.RIGHT,
}

# on-screen control buttons
BUTTON_BINDINGS = {
    'up': Direction.UP,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
}

CueListener = Callable[[str], None]
RenderListener = Callable[[GameState], None]
SceneListener = Callable[[Scene], None]


class Session:
    """Embedding layer: routes input to a GameState and fans statuses out to
    the audio, render and scene collaborators registered as listeners."""

    def __init__(self, difficulty: str = 'easy', seed: Optional[int] = None):
        self.seed = seed
        self.state = GameState(difficulty, seed)
        self.scene = Scene.INTRO
        self.muted = False
        self._cue_listeners: List[CueListener] = []
        self._render_listeners: List[RenderListener] = []
        self._scene_listeners: List[SceneListener] = []

    def on_cue(self, fn: CueListener) -> None:
        self._cue_listeners.append(fn)

    def on_render(self, fn: RenderListener) -> None:
        self._render_listeners.append(fn)

    def on_scene(self, fn: SceneListener) -> None:
        self._scene_listeners.append(fn)

    def _cue(self, name: str) -> None:
        if self.muted:
            return
        for fn in self._cue_listeners:
            fn(name)

    def _render(self) -> None:
        for fn in self._render_listeners:
            fn(self.state)

    def _show(self, scene: Scene) -> None:
        self.scene = scene
        logger.debug('scene -> %s', scene.value)
        for fn in self._scene_listeners:
            fn(scene)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def accept(self) -> None:
        if self.scene is not Scene.INTRO:
            return
        self._cue('chime')
        self._cue('love')
        self._show(Scene.TRANSITION)

    def enter_game(self) -> None:
        # first board honours the session seed; later boards are random
        self._show(Scene.GAME)
        self.new_maze(self.seed)

    def _leave_win(self) -> None:
        # a fresh board after a win must be playable
        if self.scene is Scene.WIN:
            self._show(Scene.GAME)

    def new_maze(self, seed: Optional[int] = None) -> None:
        self._leave_win()
        self.state.reset(seed=seed)
        self._render()

    def set_difficulty(self, label: str, seed: Optional[int] = None) -> None:
        self.state.reset(label, seed=seed)
        self._leave_win()
        self._render()

    def play_again(self, seed: Optional[int] = None) -> None:
        self._show(Scene.GAME)
        self.new_maze(seed)

    def move(self, direction: Direction) -> MoveResult:
        result = self.state.move(direction)
        if result.status is MoveStatus.MOVED:
            self._cue('click')
            self._render()
        elif result.status is MoveStatus.WON:
            self._cue('win')
            self._render()
            self._show(Scene.WIN)
        return result

    def press_button(self, name: str) -> Optional[MoveResult]:
        if self.scene is not Scene.GAME:
            return None
        direction = BUTTON_BINDINGS.get(name)
        if direction is None:
            return None
        return self.move(direction)

    def handle_key(self, key: str) -> Optional[MoveResult]:
        if self.scene is not Scene.GAME:
            return None
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            return None
        return self.move(direction)
