"""
Simulation engine.

QixEngine advances a GameState one tick at a time: player motion and the
line-drawing state machine, Qix and spark motion, collisions, and the
score/lives/territory bookkeeping. The host loop owns scheduling; the
engine never schedules itself and never touches pygame.
"""

import logging
import math
import random
import time
from typing import Callable, List, Optional

from qix.config import GameConfig
from qix.controls import IDLE, InputIntent
from qix.entities import GameState, SessionPhase
from qix.geometry import Point, bounding_box, distance, polyline_length

logger = logging.getLogger(__name__)


class Scoreboard:
    """
    Receiver for the counters a front end displays.

    The default implementation ignores everything; front ends override
    the methods they care about.
    """

    def show_counters(self, score: int, lives: int, territory: int):
        pass

    def show_game_over(self, score: int, territory: int):
        pass


class QixEngine:
    """
    Owns the session state and advances it on request.

    Args:
        config: Field dimensions and tuning constants
        scoreboard: Collaborator notified of counter changes and game over
        rng: Source of the Qix's random nudges
        clock: Wall-clock seconds, used for the post-start grace period
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 scoreboard: Optional[Scoreboard] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.config = config or GameConfig()
        self.scoreboard = scoreboard or Scoreboard()
        self.rng = rng or random.Random()
        self.clock = clock
        self.state = GameState.initial(self.config)

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    def start(self):
        """Begin (or, after a game over, restart) the session."""
        if self.state.phase == SessionPhase.GAME_OVER:
            self._reset_state()
        if self.state.phase != SessionPhase.STOPPED:
            logger.debug("start() ignored in phase %s", self.state.phase.name)
            return
        self.state.phase = SessionPhase.RUNNING
        self.state.game_start_time = self.clock()
        logger.info("Session started")

    def toggle_pause(self):
        """Switch between running and paused; ignored in other phases."""
        if self.state.phase == SessionPhase.RUNNING:
            self.state.phase = SessionPhase.PAUSED
            logger.info("Session paused")
        elif self.state.phase == SessionPhase.PAUSED:
            self.state.phase = SessionPhase.RUNNING
            logger.info("Session resumed")
        else:
            logger.debug("toggle_pause() ignored in phase %s", self.state.phase.name)

    def reset(self):
        """Stop the session and return every entity and counter to its start value."""
        self._reset_state()
        logger.info("Session reset")

    def _reset_state(self):
        self.state = GameState.initial(self.config)
        self._refresh_scoreboard()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, intent: InputIntent = IDLE):
        """
        Advance the simulation by one tick.

        Does nothing unless the session is running. Motion for every
        entity is resolved before collisions are tested.
        """
        if self.state.phase != SessionPhase.RUNNING:
            return

        self.update_player(intent)
        self.update_qix()
        self.update_sparks()
        self.check_collisions()
        self._refresh_scoreboard()

    def update_player(self, intent: InputIntent):
        """
        Apply the draw toggle, then move the player and extend the line.

        The toggle is judged against the position and border contact left
        by the previous tick.
        """
        player = self.state.player
        cfg = self.config

        if intent.draw_toggle:
            self.toggle_drawing()

        prev_x, prev_y = player.x, player.y

        # Diagonals are the plain sum of both axes
        player.x += intent.dx * player.speed
        player.y += intent.dy * player.speed

        player.x = max(cfg.left, min(cfg.right, player.x))
        player.y = max(cfg.top, min(cfg.bottom, player.y))

        player.on_border = self.is_on_border(player.x, player.y)

        if player.drawing and (player.x != prev_x or player.y != prev_y):
            self.state.current_line.append(player.position)

    def is_on_border(self, x: float, y: float) -> bool:
        """
        Check whether a point touches the outer border or a claimed edge.

        A claimed rectangle's edge only counts where the point lies within
        the rectangle's span along that edge (widened by the tolerance so
        corners are included).
        """
        cfg = self.config
        tol = cfg.BORDER_TOLERANCE

        if (x <= cfg.left + tol or x >= cfg.right - tol or
                y <= cfg.top + tol or y >= cfg.bottom - tol):
            return True

        for rect in self.state.territory:
            within_x = rect.x - tol <= x <= rect.right + tol
            within_y = rect.y - tol <= y <= rect.bottom + tol
            if within_y and (abs(x - rect.x) <= tol or abs(x - rect.right) <= tol):
                return True
            if within_x and (abs(y - rect.y) <= tol or abs(y - rect.bottom) <= tol):
                return True
        return False

    # ------------------------------------------------------------------
    # Drawing state machine
    # ------------------------------------------------------------------

    def toggle_drawing(self):
        """Start or finish a line. Only possible while on a border."""
        player = self.state.player
        if not player.on_border:
            logger.debug("Draw toggle ignored off the border at (%.0f, %.0f)",
                         player.x, player.y)
            return

        if not player.drawing:
            player.drawing = True
            self.state.current_line = [player.position]
        else:
            self.state.current_line.append(player.position)
            player.drawing = False
            self._complete_line()

    def _complete_line(self):
        """
        Archive the current line, claim its territory and score it.

        Lines with fewer than two points are dropped without effect.
        """
        line = self.state.current_line
        self.state.current_line = []

        if len(line) < 2:
            logger.debug("Discarded line with %d point(s)", len(line))
            return

        self.state.drawn_lines.append(line)
        self._claim_territory(line)

        # Scored on the completed line's real length
        points = math.floor(polyline_length(line) * self.config.LINE_POINTS_PER_PIXEL)
        self.state.score += points
        logger.debug("Line of %d points completed for %d points", len(line), points)

    def _claim_territory(self, line: List[Point]):
        """Claim the line's bounding box if it is large enough on both axes."""
        area = bounding_box(line)
        min_size = self.config.MIN_CLAIM_SIZE

        if area.width > min_size and area.height > min_size:
            self.state.territory.append(area)
            logger.debug("Claimed %.0fx%.0f at (%.0f, %.0f)",
                         area.width, area.height, area.x, area.y)
            self.recalculate_territory()
        else:
            logger.debug("Claim %.0fx%.0f too small, discarded", area.width, area.height)

    def recalculate_territory(self):
        """
        Recompute the claimed percentage and award the milestone bonus.

        The bonus fires once per session, on the claim that moves the
        percentage from below the band into it.
        """
        cfg = self.config
        state = self.state
        previous = state.territory_percentage

        state.territory_percentage = min(
            math.floor(100 * state.claimed_area / cfg.playfield_area), 100
        )

        if (not state.bonus_awarded and previous < cfg.BONUS_LOW and
                cfg.BONUS_LOW <= state.territory_percentage < cfg.BONUS_HIGH):
            state.bonus_awarded = True
            state.score += cfg.BONUS_POINTS
            logger.debug("Territory bonus awarded at %d%%", state.territory_percentage)

    # ------------------------------------------------------------------
    # Enemies
    # ------------------------------------------------------------------

    def update_qix(self):
        """
        Move the Qix, bounce it off the inner walls and record its trail.

        Occasionally nudges the velocity at random, capping the speed.
        """
        qix = self.state.qix
        cfg = self.config
        inset = cfg.QIX_BOUNCE_INSET

        qix.x += qix.vx
        qix.y += qix.vy

        if qix.x <= inset or qix.x >= cfg.WIDTH - inset:
            qix.vx *= -1
        if qix.y <= inset or qix.y >= cfg.HEIGHT - inset:
            qix.vy *= -1

        qix.trail.append(qix.position)

        if self.rng.random() < cfg.QIX_TURN_CHANCE:
            qix.vx += (self.rng.random() - 0.5) * cfg.QIX_TURN_STRENGTH
            qix.vy += (self.rng.random() - 0.5) * cfg.QIX_TURN_STRENGTH
            speed = qix.speed
            if speed > cfg.QIX_MAX_SPEED:
                qix.vx = qix.vx / speed * cfg.QIX_MAX_SPEED
                qix.vy = qix.vy / speed * cfg.QIX_MAX_SPEED

    def update_sparks(self):
        """Slide each spark along its row, reversing at the side walls."""
        cfg = self.config
        for spark in self.state.sparks:
            spark.x += spark.direction * spark.speed
            if spark.x <= cfg.left or spark.x >= cfg.right:
                spark.direction *= -1

    # ------------------------------------------------------------------
    # Collisions and lives
    # ------------------------------------------------------------------

    def in_grace_period(self) -> bool:
        start = self.state.game_start_time
        return start is None or self.clock() - start < self.config.GRACE_PERIOD

    def check_collisions(self) -> bool:
        """
        Test the player against every hazard, in priority order.

        At most one life is lost per tick.

        Returns:
            True if a life was lost
        """
        if self.in_grace_period():
            return False

        state = self.state
        player = state.player
        qix = state.qix
        cfg = self.config
        pos = player.position

        hit = None
        if distance(pos, qix.position) < player.size + qix.size:
            hit = "qix"
        elif player.drawing and any(
                distance(pos, point) < player.size + cfg.TRAIL_HIT_PAD
                for point in qix.trail):
            hit = "qix trail"
        elif any(distance(pos, spark.position) < player.size + cfg.SPARK_HIT_PAD
                 for spark in state.sparks):
            hit = "spark"
        elif player.drawing and any(
                distance(point, qix.position) < qix.size + cfg.LINE_HIT_PAD
                for point in state.current_line):
            hit = "line cut"

        if hit is None:
            return False

        logger.info("Player hit by %s", hit)
        self._handle_player_death()
        return True

    def _handle_player_death(self):
        """Remove a life, cancel the line and respawn; end the game at zero."""
        state = self.state
        state.lives -= 1
        state.current_line = []
        state.player.respawn(*self.config.start_position)
        logger.info("Life lost, %d remaining", state.lives)

        if state.lives <= 0:
            self._game_over()

    def _game_over(self):
        state = self.state
        state.phase = SessionPhase.GAME_OVER
        logger.info("Game over: score %d, territory %d%%",
                    state.score, state.territory_percentage)
        self.scoreboard.show_game_over(state.score, state.territory_percentage)

    def _refresh_scoreboard(self):
        state = self.state
        self.scoreboard.show_counters(state.score, state.lives, state.territory_percentage)
