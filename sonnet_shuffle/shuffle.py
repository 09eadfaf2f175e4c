import logging
import random
import time
from typing import Dict, Optional, Any, Callable, Tuple
from pydantic import BaseModel, Field, ConfigDict

from .environment import (
    DropOutcome,
    FeedbackTimer,
    FrameView,
    InvalidInput,
    PlacementEngine,
    PuzzleState,
    ShuffleConfig,
    SlotAnnotation,
    SlotGeometry,
    SlotView,
    SonnetSource,
    Unavailable,
)
from .verifiers import CheckResult, check_order, can_check, can_start_new_puzzle


logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load sonnets."


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000


def source_for(config: ShuffleConfig) -> SonnetSource:
    """Sonnet source named by a config: its sonnets_path, else the bundled set."""
    if config.sonnets_path is not None:
        return SonnetSource.from_file(config.sonnets_path, seed=config.seed)
    return SonnetSource.bundled(seed=config.seed)


def timer_for(config: ShuffleConfig) -> FeedbackTimer:
    return FeedbackTimer(
        duration_ms=config.shake_duration_ms,
        frequency_hz=config.shake_frequency_hz,
        amplitude=config.shake_amplitude,
    )


class SonnetShuffle(BaseModel):
    """
    Top-level controller for the sonnet puzzle.

    Owns the puzzle state, the placement engine and the shake timer, routes
    input to them, gates the "new sonnet" action and builds the per-frame
    view for whatever front end draws the board.

    Attributes:
        config: Session configuration
        source: Where canonical lines come from
        state: The current puzzle, None until one has started
        engine: Placement engine bound to the current puzzle
        timer: Shake feedback for the last failed check
        geometry: Slot layout used for pointer hit testing
        message: Last user-visible error, if any
        clock: Time source in milliseconds
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: ShuffleConfig = Field(default_factory=ShuffleConfig)
    source: SonnetSource = Field(default_factory=SonnetSource)
    state: Optional[PuzzleState] = None
    engine: Optional[PlacementEngine] = None
    timer: FeedbackTimer = Field(default_factory=FeedbackTimer)
    geometry: SlotGeometry = Field(default_factory=SlotGeometry)
    message: Optional[str] = None
    clock: Callable[[], float] = Field(default=monotonic_ms, exclude=True)
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Derive unset parts from the config and seed the shuffle generator."""
        if "source" not in self.model_fields_set:
            self.source = source_for(self.config)
        if "timer" not in self.model_fields_set:
            self.timer = timer_for(self.config)
        if "geometry" not in self.model_fields_set:
            self.geometry = SlotGeometry(compact=self.config.compact_layout)
        self._rng = random.Random(self.config.seed)

    @classmethod
    def create(
        cls,
        config: Optional[ShuffleConfig] = None,
        source: Optional[SonnetSource] = None,
        clock: Optional[Callable[[], float]] = None,
        **config_kwargs: Any
    ) -> "SonnetShuffle":
        """
        Factory method to build a controller from configuration.

        Args:
            config: Optional ShuffleConfig instance
            source: Optional sonnet source (defaults to config.sonnets_path
                or the bundled collection)
            clock: Optional time source in milliseconds
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured SonnetShuffle instance (no puzzle started yet)
        """
        if config is None:
            config = ShuffleConfig(**config_kwargs)

        kwargs: Dict[str, Any] = {"source": source if source is not None else source_for(config)}
        if clock is not None:
            kwargs["clock"] = clock

        return cls(config=config, **kwargs)

    @property
    def can_check(self) -> bool:
        """Whether the "Check Order" action is enabled."""
        return self.state is not None and can_check(self.state)

    @property
    def can_start_new_puzzle(self) -> bool:
        """Whether the "New Sonnet" action is enabled."""
        return self.state is not None and can_start_new_puzzle(self.state)

    @property
    def is_dragging(self) -> bool:
        return self.engine is not None and self.engine.is_dragging

    def new_puzzle(self, force: bool = False) -> bool:
        """
        Start a new puzzle from a freshly loaded sonnet.

        The first puzzle always starts. Later ones require the last check to
        have passed, unless forced. If the sonnet cannot be loaded, the
        current puzzle is kept and a message is set for the player.

        Args:
            force: Skip the pass requirement

        Returns:
            True if a new puzzle was started
        """
        if self.state is not None and not force and not self.can_start_new_puzzle:
            logger.info("New puzzle refused: current board has not passed a check")
            return False

        try:
            lines = self.source.load_sonnet()
            state = PuzzleState.create(lines, seed=self.config.seed, rng=self._rng)
        except (Unavailable, InvalidInput) as e:
            logger.warning("Could not start a puzzle: %s", e)
            self.message = f"{LOAD_FAILED_MESSAGE} {e}"
            return False

        self.state = state
        self.engine = PlacementEngine(state=state)
        self.timer.stop()
        self.message = None
        return True

    def pick_up(self, index: Optional[int], pointer: Optional[Tuple[float, float]] = None) -> bool:
        """Begin dragging the line in a slot."""
        if self.engine is None:
            return False
        return self.engine.pick_up(index, pointer)

    def hover(self, index: Optional[int], pointer: Optional[Tuple[float, float]] = None) -> None:
        """Update the slot under the dragged line."""
        if self.engine is not None:
            self.engine.hover(index, pointer)

    def drop(self, index: Optional[int]) -> DropOutcome:
        """Release the dragged line over a slot, or outside with None."""
        if self.engine is None:
            return "IGNORED"
        return self.engine.drop(index)

    def cancel_drag(self) -> None:
        """Abandon the current gesture (e.g. touch cancel)."""
        if self.engine is not None:
            self.engine.cancel()

    def move(self, source: int, target: Optional[int]) -> DropOutcome:
        """Pick up and drop in one step, as a keyboard or test driver would."""
        if not self.pick_up(source):
            return "IGNORED"
        return self.drop(target)

    def check_order(self) -> Optional[CheckResult]:
        """
        Check the board, restarting the shake for flagged slots.

        Returns:
            CheckResult, or None if there was nothing to check
        """
        if self.state is None or self.is_dragging:
            return None
        return check_order(self.state, timer=self.timer, now=self.clock())

    def pointer_down(self, x: float, y: float) -> None:
        """Pointer pressed: start a drag on a slot, or press a button."""
        slot = self.geometry.slot_at(x, y)
        if slot is not None:
            self.pick_up(slot, (x, y))
            return

        button = self.geometry.button_at(x, y)
        if button is not None:
            self.press_button(button)

    def pointer_move(self, x: float, y: float) -> None:
        """Pointer moved while possibly dragging."""
        self.hover(self.geometry.slot_at(x, y), (x, y))

    def pointer_up(self, x: float, y: float) -> DropOutcome:
        """Pointer released: drop on the slot under it, if any."""
        return self.drop(self.geometry.slot_at(x, y))

    def press_button(self, name: str) -> None:
        """Activate a button if it is enabled."""
        if name == "check_order":
            if self.can_check:
                self.check_order()
        elif name == "new_sonnet":
            if self.can_start_new_puzzle:
                self.new_puzzle()
        else:
            raise ValueError(f"Unknown button: {name}")

    def annotation_at(self, index: int, now: float) -> SlotAnnotation:
        """Stored annotation for a slot, or SHAKING while its shake runs."""
        if self.timer.is_active(now) and index in self.timer.flagged_indices:
            return "SHAKING"
        return self.state.annotations[index]

    def frame(self, now: Optional[float] = None) -> FrameView:
        """
        Build the snapshot a front end needs to draw one frame.

        Args:
            now: Current time in milliseconds (defaults to the clock)

        Returns:
            FrameView for the current puzzle (empty if none has started)
        """
        if self.state is None:
            return FrameView(message=self.message)

        if now is None:
            now = self.clock()

        drag = self.engine.session if self.engine else None
        hovered = drag.hovered_index if drag else None

        slots = [
            SlotView(
                index=i,
                line=line,
                annotation=self.annotation_at(i, now),
                offset=self.timer.offset_for(i, now),
                hovered=hovered == i,
            )
            for i, line in enumerate(self.state.slots)
        ]

        return FrameView(
            slots=slots,
            drag=drag.model_copy() if drag else None,
            attempts=self.state.attempts,
            passed=self.state.passed,
            can_check=self.can_check,
            can_start_new_puzzle=self.can_start_new_puzzle,
            message=self.message,
        )

    def get_state(self) -> Dict:
        """
        Get the current session state.

        Returns:
            Dictionary containing session state
        """
        return {
            "puzzle": self.state.get_state() if self.state else None,
            "is_dragging": self.is_dragging,
            "can_check": self.can_check,
            "can_start_new_puzzle": self.can_start_new_puzzle,
            "message": self.message,
        }
