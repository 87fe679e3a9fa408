"""
Command Pipeline - Runs one command from transcript to ranked results.

States move IDLE -> RESOLVING -> EXECUTING -> DONE | FAILED. Every run
captures a generation number when it starts; a newer command bumps the
generation, and results of older runs are dropped instead of published.
"""

from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError, as_completed
from typing import Callable, Optional, Sequence
import logging
import threading

from talent_matcher.core.errors import MatchingError, PipelineTimeoutError
from talent_matcher.core.matcher import MatchScorer
from talent_matcher.core.models import Catalog, MatchResult, ScoringMode
from talent_matcher.intent.classifier import IntentResolver

from .executor import ActionExecutor, Pair
from .results import CommandResult, PipelineState

Listener = Callable[[CommandResult], None]


class CommandPipeline:
    """Resolves, executes and publishes commands with a wall-clock budget."""

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_WORKERS = 8
    TERMINAL_STATES = (PipelineState.DONE, PipelineState.FAILED)

    def __init__(
        self,
        resolver: Optional[IntentResolver] = None,
        scorer: Optional[MatchScorer] = None,
        mode: ScoringMode = ScoringMode.RULE_BASED,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """
        Initialize the pipeline.

        Args:
            resolver: Intent resolver; rule-based when omitted
            scorer: Pair scorer for the matching actions
            mode: Scoring mode used for matching actions
            timeout: Seconds allowed for a whole run
            max_workers: Upper bound on concurrent scoring calls
        """
        self.resolver = resolver or IntentResolver(mode=mode)
        self.mode = mode
        self.timeout = timeout
        self.max_workers = max(1, max_workers)
        self.executor = ActionExecutor(
            scorer=scorer or MatchScorer(),
            mode=mode,
            score_pairs=self.score_pairs,
        )
        self.logger = logging.getLogger(self.__class__.__name__)

        self._lock = threading.Lock()
        self._generation = 0
        self._state = PipelineState.IDLE
        self._listeners: list[Listener] = []

    @property
    def state(self) -> PipelineState:
        with self._lock:
            return self._state

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def add_listener(self, listener: Listener) -> None:
        """Register a callback for results of current-generation runs."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> bool:
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def run_command(self, transcript: str, catalog: Catalog) -> Optional[CommandResult]:
        """
        Process one command and block until it finishes or times out.

        Args:
            transcript: Free-text command
            catalog: Snapshot read for the whole run

        Returns:
            The result, or None when a newer command superseded this one
        """
        generation = self._begin()
        self.logger.info(f"Processing command #{generation}: '{transcript}'")

        # One worker per run, so an abandoned run never blocks the next one
        runner = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"command-{generation}")
        future = runner.submit(self._process, generation, transcript, catalog)
        runner.shutdown(wait=False)

        try:
            result = future.result(timeout=self.timeout)
        except FutureTimeoutError:
            self.logger.error(f"Command #{generation} timed out after {self.timeout}s")
            result = CommandResult.failure(PipelineTimeoutError(), transcript)
        except MatchingError as e:
            self.logger.error(f"Command #{generation} failed: {e}")
            result = CommandResult.failure(e, transcript)
        except Exception as e:
            self.logger.exception(f"Command #{generation} failed unexpectedly")
            result = CommandResult.failure(MatchingError(str(e)), transcript)

        return self._publish(generation, result)

    def submit(self, transcript: str, catalog: Catalog) -> Future:
        """Run a command on a background thread; the future resolves like run_command."""
        future: Future = Future()

        def target():
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(self.run_command(transcript, catalog))
            except BaseException as e:
                future.set_exception(e)

        threading.Thread(target=target, name="command-submit", daemon=True).start()
        return future

    def score_pairs(self, pairs: Sequence[Pair]) -> list[MatchResult]:
        """
        Score pairs concurrently and return results in submission order.

        Waits for every pair; a failure other than the per-pair AI fallback
        propagates and fails the run.
        """
        if not pairs:
            return []

        results: list[Optional[MatchResult]] = [None] * len(pairs)
        workers = min(self.max_workers, len(pairs))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scorer") as pool:
            futures = {
                pool.submit(self.executor.scorer.score, talent, opp, self.mode): index
                for index, (talent, opp) in enumerate(pairs)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()

        self.logger.debug(f"Scored {len(pairs)} pairs with {workers} workers")
        return results

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            self._state = PipelineState.RESOLVING
            return self._generation

    def _set_state(self, generation: int, state: PipelineState) -> None:
        # A run that already timed out stays FAILED while its worker finishes
        with self._lock:
            if generation == self._generation and self._state not in self.TERMINAL_STATES:
                self._state = state

    def _process(self, generation: int, transcript: str, catalog: Catalog) -> CommandResult:
        intent = self.resolver.resolve(transcript, catalog)
        self._set_state(generation, PipelineState.EXECUTING)
        result = self.executor.execute(intent, catalog)
        result.transcript = transcript
        result.status = PipelineState.DONE
        return result

    def _publish(self, generation: int, result: CommandResult) -> Optional[CommandResult]:
        with self._lock:
            stale = generation != self._generation
            if not stale:
                self._state = result.status

        if stale:
            self.logger.debug(f"Discarding stale result of command #{generation}")
            return None

        if result.succeeded:
            self.logger.info(f"Command #{generation} done: {result.message}")

        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:
                self.logger.exception(f"Listener {listener!r} failed on command #{generation}")
        return result
