"""Maze topology generation over a RoomGraph.

The generator runs as a small state machine:

    IDLE -> TRAVERSING -> REPAIRING -> (LOOPING) -> FINALIZING -> DONE

1. Traversing: randomized depth-first search with backtracking, driven by an
   explicit stack and capped by an iteration ceiling. The first valid
   direction of each shuffle wins, which biases the maze towards long
   corridors.
2. Repairing: one raster-order pass that joins any room the traversal never
   reached to a random visited neighbor.
3. Looping ("wacking"): optional. Opens random extra door pairs, adding
   cycles. Only ever opens doors, so connectivity is preserved.
4. Finalizing: counts dead ends and resolves a tile piece for every room.

Hitting the ceiling and leaving a room isolated are both reported through
``GenerationReport`` and the log rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from tilemaze import config
from tilemaze.types import GridCoord, GridPos

from .room import Direction
from .room_graph import RoomGraph

if TYPE_CHECKING:
    from tilemaze.pieces.selector import PieceSelector
    from tilemaze.util.rng import RNG

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    IDLE = auto()
    TRAVERSING = auto()
    REPAIRING = auto()
    LOOPING = auto()
    FINALIZING = auto()
    DONE = auto()


class GenerationOutcome(Enum):
    """How a finished run ended up."""

    COMPLETE = auto()  # Traversal finished on its own
    CEILING_REPAIRED = auto()  # Ceiling hit, repair pass filled the gaps
    ISOLATED_ROOMS = auto()  # Some room could not be joined


@dataclass
class GenerationReport:
    """Summary of one generation run.

    Attributes:
        iterations: Traversal steps taken.
        ceiling_reached: Traversal stopped at the iteration ceiling with
            rooms still on the stack.
        repaired_rooms: Rooms joined by the repair pass.
        isolated_rooms: Rooms left unvisited after repair.
        loops_added: Door pairs opened by loop injection.
        dead_ends: Rooms with exactly one open door.
        props_placed: Props scattered by the compositor (set by the pipeline).
    """

    iterations: int = 0
    ceiling_reached: bool = False
    repaired_rooms: list[GridPos] = field(default_factory=list)
    isolated_rooms: list[GridPos] = field(default_factory=list)
    loops_added: int = 0
    dead_ends: int = 0
    props_placed: int = 0

    @property
    def outcome(self) -> GenerationOutcome:
        if self.isolated_rooms:
            return GenerationOutcome.ISOLATED_ROOMS
        if self.ceiling_reached:
            return GenerationOutcome.CEILING_REPAIRED
        return GenerationOutcome.COMPLETE


class MazeGenerator:
    """Builds a connected RoomGraph.

    Example:
        generator = MazeGenerator(6, 6, random.Random(7), loops_enabled=False)
        graph = generator.generate()
        assert graph.is_connected()

    Attributes:
        columns: Room grid width.
        rows: Room grid height.
        rng: Random source shared by every phase, drawn in phase order.
        max_iterations: Traversal step ceiling.
        loops_enabled: Whether to run loop injection.
        loop_iterations: Number of loop injection attempts.
        selector: Resolves ``Room.resolved_piece`` while finalizing. When
            None, only the topology is produced.
    """

    def __init__(
        self,
        columns: GridCoord,
        rows: GridCoord,
        rng: RNG,
        *,
        max_iterations: int = config.MAX_GENERATION_ITERATIONS,
        loops_enabled: bool = False,
        loop_iterations: int = config.LOOP_ITERATIONS,
        selector: PieceSelector | None = None,
    ) -> None:
        self.columns = columns
        self.rows = rows
        self.rng = rng
        self.max_iterations = max_iterations
        self.loops_enabled = loops_enabled
        self.loop_iterations = loop_iterations
        self.selector = selector
        self.state = GenerationState.IDLE
        self.graph: RoomGraph | None = None
        self.report = GenerationReport()

    def generate(self) -> RoomGraph:
        """Run every phase and return the finished graph.

        Each call builds a fresh grid and a fresh report.
        """
        self.report = GenerationReport()
        graph = self._initialize()

        self.state = GenerationState.TRAVERSING
        self._traverse(graph)

        self.state = GenerationState.REPAIRING
        self._repair(graph)

        if self.loops_enabled:
            self.state = GenerationState.LOOPING
            self._inject_loops(graph)

        self.state = GenerationState.FINALIZING
        self._finalize(graph)

        self.state = GenerationState.DONE
        logger.info(
            f"Generated {self.columns}x{self.rows} maze in "
            f"{self.report.iterations} steps: {self.report.loops_added} loops, "
            f"{self.report.dead_ends} dead ends ({self.report.outcome.name})"
        )
        return graph

    def _initialize(self) -> RoomGraph:
        graph = RoomGraph(self.columns, self.rows)
        self.graph = graph
        start = graph.room(
            self.rng.randrange(self.columns), self.rng.randrange(self.rows)
        )
        start.visited = True
        start.is_start = True
        graph.stack.append(start)
        return graph

    def _traverse(self, graph: RoomGraph) -> None:
        stack = graph.stack
        iterations = 0
        while stack and iterations < self.max_iterations:
            iterations += 1
            current = stack[-1]

            directions = list(Direction)
            self.rng.shuffle(directions)

            for direction in directions:
                other = graph.neighbor(current, direction)
                if other is not None and not other.visited:
                    graph.connect(current, direction)
                    other.visited = True
                    stack.append(other)
                    break
            else:
                stack.pop()

        self.report.iterations = iterations
        if stack:
            self.report.ceiling_reached = True
            unvisited = sum(1 for room in graph if not room.visited)
            logger.warning(
                f"Traversal hit the {self.max_iterations} step ceiling with "
                f"{len(stack)} rooms on the stack and {unvisited} unvisited; "
                "continuing with repair"
            )

    def _repair(self, graph: RoomGraph) -> None:
        for room in graph:
            if room.visited:
                continue

            candidates: list[Direction] = []
            for direction in Direction:
                other = graph.neighbor(room, direction)
                if other is not None and other.visited:
                    candidates.append(direction)

            if not candidates:
                self.report.isolated_rooms.append(room.pos)
                logger.warning(f"{room!r} has no visited neighbor; left isolated")
                continue

            graph.connect(room, self.rng.choice(candidates))
            room.visited = True
            self.report.repaired_rooms.append(room.pos)

        if self.report.repaired_rooms:
            logger.debug(f"Repaired rooms: {self.report.repaired_rooms}")

    def _inject_loops(self, graph: RoomGraph) -> None:
        for _ in range(self.loop_iterations):
            room = graph.room(
                self.rng.randrange(self.columns), self.rng.randrange(self.rows)
            )
            direction = Direction(self.rng.randrange(len(Direction)))
            if room.doors[direction]:
                continue
            other = graph.neighbor(room, direction)
            # Isolated rooms stay isolated: they have no piece to open onto
            if other is None or not (room.visited and other.visited):
                continue
            graph.connect(room, direction)
            self.report.loops_added += 1

    def _finalize(self, graph: RoomGraph) -> None:
        self.report.dead_ends = sum(1 for room in graph if room.is_dead_end)
        if self.selector is None:
            return

        resolved = 0
        for room in graph:
            if not room.visited:
                # Already reported as isolated
                continue
            self.selector.resolve(room)
            resolved += 1
        logger.debug(f"Resolved pieces for {resolved} rooms")
