from __future__ import annotations

import logging
import random
from dataclasses import replace
from datetime import date
from typing import Callable, FrozenSet, List, Optional, Tuple

from mashup.core.models import (
    MAX_TRIES,
    PAIR_COUNT,
    SLOT_COUNT,
    SavedGameState,
    Word,
    pair_index,
    pair_slots,
)
from mashup.core.puzzles import Pair, Puzzle
from mashup.core.share import format_share_text
from mashup.core.statistics import GameStatistics, StatisticsTracker
from mashup.core.storage import DailyGateStore, KeyValueStore, SnapshotStore
from mashup.core.timers import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

FEEDBACK_DELAY = 2.0
REVEAL_DELAY = 2.0

Listener = Callable[["PuzzleEngine"], None]


class PuzzleEngine:
    """State machine for one day's puzzle.

    The player fills ten ordered slots (five pairs: slots ``2i`` and ``2i+1``)
    and submits up to three times. A pair found correct stays locked for the
    rest of the day. Invalid operations are ignored and reported by a
    ``False`` return value; nothing here raises for bad input.

    Start-up picks one of three modes:
      * **completed today** – the saved snapshot is restored read-only.
      * **played today** – the day's words come back unshuffled.
      * **fresh day** – the words are shuffled and today is recorded.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        store: KeyValueStore,
        *,
        scheduler: Scheduler,
        today: Callable[[], date] = date.today,
        rng: Optional[random.Random] = None,
        feedback_delay: float = FEEDBACK_DELAY,
        reveal_delay: float = REVEAL_DELAY,
    ) -> None:
        self._puzzle = puzzle
        self._gate = DailyGateStore(store)
        self._snapshots = SnapshotStore(store)
        self._tracker = StatisticsTracker(store)
        self._scheduler = scheduler
        self._today = today
        self._rng = rng or random.Random()
        self._feedback_delay = feedback_delay
        self._reveal_delay = reveal_delay

        self._words: List[Word] = []
        self._slots: List[Optional[Word]] = [None] * SLOT_COUNT
        self._tries_remaining = MAX_TRIES
        self._has_submitted = False
        self._pair_results: Tuple[Optional[bool], ...] = ()
        self._correct_pair_indices: FrozenSet[int] = frozenset()
        self._game_completed = False
        self._results_message = ""
        self._showing_correct_answers = False
        self._completed_today = False

        self._feedback_timer: Optional[TimerHandle] = None
        self._reveal_timer: Optional[TimerHandle] = None
        self._listeners: List[Listener] = []

        self._setup()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def words(self) -> Tuple[Word, ...]:
        return tuple(self._words)

    @property
    def active_words(self) -> Tuple[Optional[Word], ...]:
        return tuple(self._slots)

    @property
    def available_words(self) -> Tuple[Word, ...]:
        return tuple(w for w in self._words if not w.is_paired)

    @property
    def tries_remaining(self) -> int:
        return self._tries_remaining

    @property
    def has_submitted(self) -> bool:
        return self._has_submitted

    @property
    def pair_results(self) -> Tuple[Optional[bool], ...]:
        """Per-pair outcome of the latest submission; empty once feedback is cleared.

        A pair submitted with an empty slot is reported as None.
        """
        return self._pair_results

    @property
    def correct_pair_indices(self) -> FrozenSet[int]:
        return self._correct_pair_indices

    @property
    def game_completed(self) -> bool:
        return self._game_completed

    @property
    def results_message(self) -> str:
        return self._results_message

    @property
    def showing_correct_answers(self) -> bool:
        return self._showing_correct_answers

    @property
    def is_puzzle_completed_today(self) -> bool:
        return self._completed_today

    @property
    def statistics(self) -> GameStatistics:
        """A copy of the running totals."""
        stats = self._tracker.statistics
        return replace(stats, mistake_distribution=dict(stats.mistake_distribution))

    @property
    def correct_answers(self) -> Tuple[Pair, ...]:
        return self._puzzle.pairs

    @property
    def all_words_placed(self) -> bool:
        return all(slot is not None for slot in self._slots)

    def is_pair_correct(self, index: int) -> Optional[bool]:
        """True/False while feedback is showing, True for locked pairs, otherwise None."""
        if index in self._correct_pair_indices:
            return True
        if not self._has_submitted or not 0 <= index < len(self._pair_results):
            return None
        return self._pair_results[index]

    def is_word_in_correct_pair(self, position: int) -> bool:
        return pair_index(position) in self._correct_pair_indices

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(engine)`` after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Engine listener %r failed", listener)

    # ------------------------------------------------------------------
    # Board operations
    # ------------------------------------------------------------------

    def place_word(self, word: Word, position: int) -> bool:
        """Put a pool word into a slot, sending any previous occupant back to the pool."""
        if not self._can_edit(position):
            return False
        pooled = self._find_word(word.id)
        if pooled is None:
            logger.debug("Ignoring unknown word %r", word.text)
            return False
        if any(slot is not None and slot.id == pooled.id for slot in self._slots):
            logger.debug("Ignoring duplicate placement of %r", pooled.text)
            return False

        existing = self._slots[position]
        if existing is not None:
            existing.is_paired = False
        pooled.is_paired = True
        self._slots[position] = pooled
        self._clear_feedback()
        self._notify()
        return True

    def remove_word(self, position: int) -> bool:
        if not self._can_edit(position):
            return False
        word = self._slots[position]
        if word is None:
            return False

        word.is_paired = False
        self._slots[position] = None
        self._clear_feedback()
        self._notify()
        return True

    def swap_words(self, source: int, destination: int) -> bool:
        if source == destination:
            return False
        if not (self._can_edit(source) and self._can_edit(destination)):
            return False

        self._slots[source], self._slots[destination] = self._slots[destination], self._slots[source]
        self._clear_feedback()
        self._notify()
        return True

    def find_next_available_slot(self) -> Optional[int]:
        for position, slot in enumerate(self._slots):
            if slot is None:
                return position
        return None

    def submit(self) -> bool:
        """Score the board, spend one try and resolve the day if it is over.

        Callers should only submit a full board; a pair with an empty slot is
        skipped: it is not found and its result is None.
        """
        if self._game_completed or self._tries_remaining <= 0:
            logger.debug("Ignoring submission: game already over")
            return False
        self._cancel(self._feedback_timer)
        self._feedback_timer = None

        results: List[Optional[bool]] = []
        found = set()
        for index in range(PAIR_COUNT):
            if index in self._correct_pair_indices:
                results.append(True)
                found.add(index)
                continue
            first_slot, second_slot = pair_slots(index)
            first, second = self._slots[first_slot], self._slots[second_slot]
            if first is None or second is None:
                # skipped, neither right nor wrong
                results.append(None)
                continue
            is_correct = (first.text, second.text) == self._puzzle.pairs[index]
            results.append(is_correct)
            if is_correct:
                found.add(index)

        self._correct_pair_indices = frozenset(found)
        self._pair_results = tuple(results)
        self._has_submitted = True
        self._tries_remaining -= 1

        correct_count = len(self._correct_pair_indices)
        if correct_count == PAIR_COUNT:
            self._results_message = "Congratulations! You found all pairs!"
            self._game_completed = True
        elif self._tries_remaining == 0:
            self._results_message = f"Game over! You found {correct_count} out of {PAIR_COUNT} pairs."
            self._game_completed = True
        else:
            self._results_message = (
                f"You found {correct_count} correct pairs!\nTries remaining: {self._tries_remaining}"
            )

        self._check_game_completion()
        self._notify()
        return True

    check_pairs = submit

    def share_text(self) -> str:
        return format_share_text(self._today(), len(self._correct_pair_indices), self._tries_remaining)

    def close(self) -> None:
        """Cancel pending timers and drop listeners. The engine should not be used afterwards."""
        self._cancel(self._feedback_timer)
        self._cancel(self._reveal_timer)
        self._feedback_timer = None
        self._reveal_timer = None
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _setup(self) -> None:
        day = self._today()
        snapshot = self._snapshots.load() if self._gate.completed_on(day) else None
        if snapshot is not None and snapshot.completion_date == day:
            self._restore(snapshot)
            logger.info("Restored completed puzzle for %s", day)
        elif self._gate.played_on(day):
            self._words = [Word(text) for text in self._puzzle.words()]
            logger.info("Puzzle %s already started on %s, reusing words", self._puzzle.key, day)
        else:
            self._words = [Word(text) for text in self._puzzle.words()]
            self._rng.shuffle(self._words)
            self._gate.last_played = day
            logger.info("Started puzzle %s for %s", self._puzzle.key, day)

    def _restore(self, snapshot: SavedGameState) -> None:
        self._words = list(snapshot.words)
        by_id = {w.id: w for w in self._words}
        self._slots = [by_id.get(w.id, w) if w is not None else None for w in snapshot.active_words]
        placed = {w.id for w in self._slots if w is not None}
        for word in self._words:
            word.is_paired = word.id in placed

        self._results_message = snapshot.results_message
        self._correct_pair_indices = snapshot.correct_pair_indices
        self._tries_remaining = snapshot.tries_remaining
        self._game_completed = True
        self._completed_today = True
        if len(self._correct_pair_indices) < PAIR_COUNT:
            self._showing_correct_answers = True

    def _check_game_completion(self) -> None:
        if not self._game_completed:
            self._feedback_timer = self._scheduler.call_later(self._feedback_delay, self._on_feedback_timeout)
            return

        day = self._today()
        self._snapshots.save(
            SavedGameState(
                words=list(self._words),
                active_words=list(self._slots),
                results_message=self._results_message,
                correct_pair_indices=self._correct_pair_indices,
                tries_remaining=self._tries_remaining,
                completion_date=day,
            )
        )
        self._gate.last_completed = day
        self._completed_today = True
        logger.info(
            "Puzzle %s completed with %d/%d pairs", self._puzzle.key, len(self._correct_pair_indices), PAIR_COUNT
        )

        self._tracker.record_outcome(self._tries_remaining, len(self._correct_pair_indices))

        if len(self._correct_pair_indices) < PAIR_COUNT:
            self._cancel(self._reveal_timer)
            self._reveal_timer = self._scheduler.call_later(self._reveal_delay, self._on_reveal_timeout)

    def _on_feedback_timeout(self) -> None:
        self._feedback_timer = None
        if self._game_completed or not self._has_submitted:
            return
        self._has_submitted = False
        self._pair_results = ()
        self._notify()

    def _on_reveal_timeout(self) -> None:
        self._reveal_timer = None
        self._showing_correct_answers = True
        self._notify()

    def _can_edit(self, position: int) -> bool:
        if self._game_completed:
            logger.debug("Ignoring edit at %s: game is over", position)
            return False
        if not 0 <= position < SLOT_COUNT:
            logger.debug("Ignoring edit at out-of-range slot %s", position)
            return False
        if pair_index(position) in self._correct_pair_indices:
            logger.debug("Ignoring edit at slot %s: pair is locked", position)
            return False
        return True

    def _clear_feedback(self) -> None:
        if not self._has_submitted:
            return
        self._has_submitted = False
        self._pair_results = ()
        self._cancel(self._feedback_timer)
        self._feedback_timer = None

    def _find_word(self, word_id: str) -> Optional[Word]:
        for word in self._words:
            if word.id == word_id:
                return word
        return None

    @staticmethod
    def _cancel(timer: Optional[TimerHandle]) -> None:
        if timer is not None:
            timer.cancel()
