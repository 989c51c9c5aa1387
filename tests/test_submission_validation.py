from minefield.leaderboard.validation import SubmissionRateLimiter, validate_submission
from tests.helpers import FakeClock


def _limiter(clock=None):
    return SubmissionRateLimiter(window=300.0, max_submissions=3, clock=clock or FakeClock())


def test_empty_name_is_refused():
    result = validate_submission("", 10.0, _limiter())
    assert not result.valid
    assert result.reason == "name required"
    assert result.message == "Please enter your name!"


def test_long_name_is_refused():
    result = validate_submission("A" * 21, 10.0, _limiter())
    assert result.reason == "name too long"
    assert result.message == "Name too long (max 20 characters)"
    assert validate_submission("A" * 20, 10.0, _limiter()).valid


def test_time_bounds_are_inclusive():
    limiter = _limiter()
    assert validate_submission("amy", 0.4, limiter).reason == "invalid time"
    assert validate_submission("amy", 10000, limiter).reason == "invalid time"
    assert validate_submission("amy", "soon", limiter).reason == "invalid time"
    assert validate_submission("bo", 0.5, limiter).valid
    assert validate_submission("cy", 9999, limiter).valid


def test_fourth_attempt_inside_window_is_refused():
    limiter = _limiter()
    results = [validate_submission("Alice", 12.0, limiter) for _ in range(4)]
    assert [r.valid for r in results] == [True, True, True, False]
    assert results[3].reason == "too many submissions"
    assert results[3].message == "Too many submissions. Please wait a few minutes."


def test_rate_limit_is_per_name():
    limiter = _limiter()
    for _ in range(3):
        validate_submission("Alice", 12.0, limiter)
    assert validate_submission("Bob", 12.0, limiter).valid


def test_rate_limit_window_expires():
    clock = FakeClock()
    limiter = _limiter(clock)
    for _ in range(3):
        assert validate_submission("Alice", 12.0, limiter).valid
    clock.advance(299.0)
    assert not validate_submission("Alice", 12.0, limiter).valid
    clock.advance(2.0)
    assert validate_submission("Alice", 12.0, limiter).valid


def test_refused_attempts_do_not_count():
    limiter = _limiter()
    validate_submission("Alice", 0.1, limiter)
    assert limiter.recent("Alice") == 0



def test_accepted_attempts_are_recorded():
    limiter = _limiter()
    validate_submission("Alice", 12.0, limiter)
    validate_submission("Alice", 12.0, limiter)
    assert limiter.recent("Alice") == 2
