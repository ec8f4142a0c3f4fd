import logging
from typing import Callable

from tile1024.errors import InvalidState
from tile1024.game import Direction, GameSession, MoveResult, Outcome
from tile1024.motion import TileMotion, tile_motions

logger = logging.getLogger(__name__)


class CompletionBarrier:
    """Calls `on_complete` once `count` completion signals have arrived."""

    def __init__(self, count: int, on_complete: Callable[[], None]):
        if count < 0:
            raise InvalidState(f"barrier count must not be negative, got {count}")
        self.remaining = count
        self._on_complete = on_complete
        self.done = False
        if count == 0:
            self._finish()

    def signal(self):
        if self.done:
            raise InvalidState("barrier already completed")
        self.remaining -= 1
        if self.remaining == 0:
            self._finish()

    def _finish(self):
        self.done = True
        self._on_complete()


class MoveController:
    """
    Sits between a front end and a GameSession. A move is presented until every
    sliding tile has reported its transition as done; intents arriving in the
    meantime are dropped. Once presentation finishes, the outcome is checked
    and `on_outcome` hears about wins and losses.
    """

    def __init__(
        self,
        session: GameSession,
        on_outcome: Callable[[Outcome], None] | None = None,
    ):
        self.session = session
        self.on_outcome = on_outcome
        self.busy = False
        self.motions: list[TileMotion] = []
        self.outcome = Outcome.CONTINUE
        self._barrier: CompletionBarrier | None = None

    def handle_intent(self, direction: Direction | str) -> MoveResult | None:
        if self.busy:
            logger.debug("handle_intent: ignoring %s, move still presenting", direction)
            return None
        result = self.session.apply_move(direction)
        if not result.changed:
            logger.debug("handle_intent: %s did not change the board", direction)
            return None

        self.busy = True
        self.motions = tile_motions(result.old_grid, result.new_grid)
        sliding = sum(1 for m in self.motions if m.animates)
        self._barrier = CompletionBarrier(sliding, self._finalize)
        return result

    def transition_done(self):
        if self._barrier is None or self._barrier.done:
            raise InvalidState("no tile transition is pending")
        self._barrier.signal()

    def finish_presentation(self):
        """Mark every pending transition as done, e.g. for front ends that do not animate."""
        while self._barrier is not None and not self._barrier.done:
            self._barrier.signal()

    def new_game(self):
        self.session.init_game()
        self._barrier = None
        self.busy = False
        self.motions = []
        self.outcome = Outcome.CONTINUE

    def _finalize(self):
        self.outcome = self.session.query_outcome()
        self.busy = False
        if self.outcome is not Outcome.CONTINUE and self.on_outcome is not None:
            self.on_outcome(self.outcome)
