"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the Controller to read/write.

Classes:
    Direction   — immutable (dx, dy) value object
    Grid        — fixed width x height cell space
    GameObject  — update + cells capability shared by Food and Snake
    Food        — one cell, respawned away from the snake
    Snake       — body, heading, alive flag
    GameModel   — one game session; owns grid, snake and food
"""

import abc
import logging
import random
from collections import deque
from itertools import islice
from typing import Iterable, NamedTuple

from .config import GRID_W, GRID_H, START_LENGTH, RESPAWN_TRIES

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


# ─────────────────────────── Errors ──────────────────────────────
class WurmError(Exception):
    """Base class for game-core errors."""


class GridFullError(WurmError):
    """Raised by Food.respawn when no free cell is left on the grid."""


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    UP    = None  # filled below after class definition
    DOWN  = None
    LEFT  = None
    RIGHT = None

    def __init__(self, x: int, y: int, name: str = ""):
        self.x = x
        self.y = y
        self.name = name

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def step(self, cell: Cell) -> Cell:
        """Return the cell one unit away from `cell` in this direction."""
        return cell[0] + self.x, cell[1] + self.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name}" if self.name else f"Direction({self.x}, {self.y})"


Direction.UP    = Direction( 0, -1, "UP")
Direction.DOWN  = Direction( 0,  1, "DOWN")
Direction.LEFT  = Direction(-1,  0, "LEFT")
Direction.RIGHT = Direction( 1,  0, "RIGHT")

# Order matters: when several keys are held, the first legal one wins.
PRIORITY = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def pick_direction(pressed: Iterable[Direction], heading: Direction) -> Direction | None:
    """
    Resolve a set of simultaneously pressed directions into one request.

    Walks PRIORITY and returns the first pressed direction that is not the
    reverse of `heading`, or None when nothing usable is pressed.
    """
    pressed = set(pressed)
    for d in PRIORITY:
        if d in pressed and not d.is_opposite(heading):
            return d
    return None


# ───────────────────────────── Grid ──────────────────────────────
class Grid:
    """Fixed-size cell space. Immutable once built."""

    __slots__ = ("_width", "_height")

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._width * self._height

    @property
    def center(self) -> Cell:
        return self._width // 2, self._height // 2

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self._width and 0 <= y < self._height

    def cells(self):
        """Iterate every cell, row by row."""
        for y in range(self._height):
            for x in range(self._width):
                yield x, y

    def __repr__(self):
        return f"Grid({self._width}, {self._height})"


# ────────────────────────── GameObject ───────────────────────────
class GameObject(abc.ABC):
    """Something the session advances each tick and the view can draw."""

    @abc.abstractmethod
    def update(self, world: "GameModel", requested: Direction | None = None) -> None:
        """Advance one tick inside `world`, given this tick's requested direction."""

    @abc.abstractmethod
    def cells(self) -> list[Cell]:
        """Occupied cells, in drawing order."""


# ───────────────────────────── Food ──────────────────────────────
class Food(GameObject):
    """
    A single piece of food.
    Relocates itself by rejection sampling, never onto an excluded cell.
    """

    def __init__(
        self,
        grid: Grid,
        excluded: Iterable[Cell] = (),
        rng: random.Random | None = None,
    ):
        self.grid = grid
        self._rng = rng or random.Random()
        self._position: Cell | None = None
        self.respawn(excluded)

    @property
    def position(self) -> Cell:
        return self._position

    def update(self, world: "GameModel", requested: Direction | None = None) -> None:
        pass

    def cells(self) -> list[Cell]:
        return [self._position]

    def place(self, cell: Cell) -> None:
        """Put the food on a specific cell."""
        if not self.grid.contains(cell):
            raise ValueError(f"food position {cell} is outside {self.grid!r}")
        self._position = tuple(cell)

    def respawn(self, excluded: Iterable[Cell] = ()) -> Cell:
        """
        Move to a uniformly random free cell and return it.

        Raises GridFullError (leaving the position untouched) when
        `excluded` covers the whole grid.
        """
        blocked = {c for c in excluded if self.grid.contains(c)}
        if len(blocked) >= self.grid.size:
            raise GridFullError(f"no free cell left on {self.grid!r}")

        w, h = self.grid.width, self.grid.height
        for _ in range(RESPAWN_TRIES):
            pos = (self._rng.randrange(w), self._rng.randrange(h))
            if pos not in blocked:
                break
        else:
            # Board is nearly full: draw from what is left instead.
            free = [c for c in self.grid.cells() if c not in blocked]
            pos = self._rng.choice(free)

        self._position = pos
        logger.debug("food respawned at %s (%d cells blocked)", pos, len(blocked))
        return pos


# ──────────────────────────── Snake ──────────────────────────────
class Snake(GameObject):
    """
    Pure game data for the snake.
    No rendering. No input handling.
    """

    def __init__(
        self,
        grid: Grid,
        segments: Iterable[Cell] | None = None,
        heading: Direction = Direction.RIGHT,
        length: int = START_LENGTH,
    ):
        self.grid = grid
        if segments is None:
            if length < 1:
                raise ValueError("snake needs at least one segment")
            cx, cy = grid.center
            segments = [(cx - i, cy) for i in range(length)]
        self.segments: deque[Cell] = deque(tuple(c) for c in segments)
        if not self.segments:
            raise ValueError("snake needs at least one segment")
        for cell in self.segments:
            if not grid.contains(cell):
                raise ValueError(f"segment {cell} is outside {grid!r}")
        self.heading: Direction = heading
        self.alive: bool = True
        self.filled: bool = False
        self.ate: bool = False

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Cell:
        return self.segments[0]

    def __len__(self) -> int:
        return len(self.segments)

    def cells(self) -> list[Cell]:
        return list(self.segments)

    # ── Commands ─────────────────────────────────────────────────
    def update(self, world: "GameModel", requested: Direction | None = None) -> None:
        self.tick(requested, world.food)

    def turn(self, requested: Direction | None) -> None:
        """Take the requested heading unless it would reverse the snake."""
        if requested is not None and not requested.is_opposite(self.heading):
            self.heading = requested

    def tick(self, requested: Direction | None = None, food: Food | None = None) -> None:
        """
        Advance one cell.

        Order: turn, push new head, check for death, then either eat
        (keep the tail, respawn the food) or drop the tail.
        A dead snake is frozen and ignores further ticks.
        """
        self.ate = False
        if not self.alive:
            return

        self.turn(requested)
        new_head = self.heading.step(self.head)
        self.segments.appendleft(new_head)

        # Checked before the tail moves: running into the tail is fatal too.
        if not self.grid.contains(new_head) or new_head in islice(self.segments, 1, None):
            self.alive = False
            logger.debug("snake died at %s, length %d", new_head, len(self.segments))
            return

        if food is not None and new_head == food.position:
            self.ate = True
            try:
                food.respawn(self.segments)
            except GridFullError:
                logger.warning("snake filled the board (%d cells)", len(self.segments))
                self.filled = True
                self.alive = False
            return

        self.segments.pop()

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, cell: Cell) -> bool:
        return tuple(cell) in self.segments


# ─────────────────────────── Snapshot ────────────────────────────
class Snapshot(NamedTuple):
    """Read-only view of one session for drawing."""
    segments: tuple[Cell, ...]
    food: Cell
    alive: bool
    score: int
    filled: bool


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    One game session.  Owns the grid, the snake and the food.
    The driver calls tick() once per fixed step; there is no reset,
    a new game means a new GameModel.
    """

    def __init__(
        self,
        width: int = GRID_W,
        height: int = GRID_H,
        rng: random.Random | None = None,
        start_length: int = START_LENGTH,
    ):
        self.grid = Grid(width, height)
        self.snake = Snake(self.grid, length=start_length)
        self.food = Food(self.grid, self.snake.segments, rng=rng)
        self._score: int = 0
        self._ticks: int = 0
        # Update order: the snake moves first and may relocate the food.
        self.objects: list[GameObject] = [self.snake, self.food]

    # ── Public API ───────────────────────────────────────────────
    @property
    def alive(self) -> bool:
        return self.snake.alive

    @property
    def filled(self) -> bool:
        return self.snake.filled

    @property
    def score(self) -> int:
        return self._score

    @property
    def ticks(self) -> int:
        return self._ticks

    def steer(self, pressed: Iterable[Direction]) -> Direction | None:
        """Pick the direction to request this tick from the held keys."""
        return pick_direction(pressed, self.snake.heading)

    def tick(self, requested: Direction | None = None) -> None:
        """Run one simulation step. No-op once the snake is dead."""
        if not self.alive:
            return
        for obj in self.objects:
            obj.update(self, requested)
        self._ticks += 1

        if self.snake.ate:
            self._score += 1
        if not self.alive:
            logger.debug("session over after %d ticks, score %d", self._ticks, self._score)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            segments=tuple(self.snake.segments),
            food=self.food.position,
            alive=self.alive,
            score=self._score,
            filled=self.filled,
        )
