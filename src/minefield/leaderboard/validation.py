from __future__ import annotations

from dataclasses import dataclass, field
from time import monotonic
from typing import Callable, Dict, List

from minefield.constants import MAX_TIME, MIN_TIME, NAME_MAX_LENGTH, RATE_LIMIT_MAX, RATE_LIMIT_WINDOW


@dataclass(frozen=True, slots=True)
class ValidationResult:
	valid: bool
	reason: str | None = None
	message: str | None = None


@dataclass(slots=True)
class SubmissionRateLimiter:
	"""Per-name submission history over a trailing window.

	Lives only in memory, so it resets whenever the game restarts. It is UX
	throttling, not a security control.
	"""

	window: float = RATE_LIMIT_WINDOW
	max_submissions: int = RATE_LIMIT_MAX
	clock: Callable[[], float] | None = field(default=None, repr=False)

	_clock: Callable[[], float] = field(init=False, repr=False)
	_history: Dict[str, List[float]] = field(init=False, repr=False)

	def __post_init__(self) -> None:
		self._clock = self.clock or monotonic
		self._history = {}

	def _prune(self, name: str, now: float) -> List[float]:
		cutoff = now - self.window
		recent = [stamp for stamp in self._history.get(name, []) if stamp > cutoff]
		self._history[name] = recent
		return recent

	def allow(self, name: str) -> bool:
		return len(self._prune(name, self._clock())) < self.max_submissions

	def record(self, name: str) -> None:
		now = self._clock()
		self._prune(name, now).append(now)

	def recent(self, name: str) -> int:
		return len(self._prune(name, self._clock()))

	def reset(self) -> None:
		self._history.clear()


def validate_submission(
	name: str | None,
	time: float,
	limiter: SubmissionRateLimiter,
) -> ValidationResult:
	"""Check a score before sending it.

	An accepted check counts against the player's rate limit, so a fourth
	accepted attempt inside the window is refused.
	"""
	if not name:
		return ValidationResult(False, "name required", "Please enter your name!")
	if len(name) > NAME_MAX_LENGTH:
		return ValidationResult(False, "name too long", f"Name too long (max {NAME_MAX_LENGTH} characters)")
	try:
		seconds = float(time)
	except (TypeError, ValueError):
		return ValidationResult(False, "invalid time", "Invalid time")
	if not (MIN_TIME <= seconds <= MAX_TIME):
		return ValidationResult(False, "invalid time", "Invalid time")
	if not limiter.allow(name):
		return ValidationResult(
			False,
			"too many submissions",
			"Too many submissions. Please wait a few minutes.",
		)
	limiter.record(name)
	return ValidationResult(True)
