import warnings

import pytest

from trappack.trap import (
    CAPTURE_TRACEBACK_ENV_VAR,
    DEFAULT_TRAP_POLICY,
    TRAP_BASE_EXCEPTIONS_ENV_VAR,
    TrapConfigError,
    TrapPolicy,
    TrapWarning,
    exception_name,
    get_active_policy,
    policy_from_env,
    run_protected,
    use_trap_policy,
)


@pytest.fixture(autouse=True)
def _clear_trap_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CAPTURE_TRACEBACK_ENV_VAR, raising=False)
    monkeypatch.delenv(TRAP_BASE_EXCEPTIONS_ENV_VAR, raising=False)


def _fail() -> None:
    raise RuntimeError("policy check")


def test_default_policy_without_env() -> None:
    assert get_active_policy() == DEFAULT_TRAP_POLICY
    assert DEFAULT_TRAP_POLICY.trapped_types == (Exception,)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("on", True), ("0", False), ("off", False)],
)
def test_policy_from_env_parses_booleans(raw: str, expected: bool) -> None:
    policy = policy_from_env({CAPTURE_TRACEBACK_ENV_VAR: raw})

    assert policy.capture_traceback is expected
    assert policy.trap_base_exceptions is False


def test_policy_from_env_rejects_unknown_values() -> None:
    with pytest.raises(TrapConfigError, match=TRAP_BASE_EXCEPTIONS_ENV_VAR):
        policy_from_env({TRAP_BASE_EXCEPTIONS_ENV_VAR: "sometimes"})


def test_env_policy_enables_traceback_capture(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CAPTURE_TRACEBACK_ENV_VAR, "1")

    outcome = run_protected(_fail)

    assert outcome.error is not None
    assert outcome.error.metadata is not None
    assert "RuntimeError: policy check" in outcome.error.metadata["traceback"]


def test_context_policy_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CAPTURE_TRACEBACK_ENV_VAR, "1")

    with use_trap_policy(TrapPolicy(capture_traceback=False)) as policy:
        assert get_active_policy() is policy
        outcome = run_protected(_fail)

    assert outcome.error is not None
    assert outcome.error.metadata is not None
    assert "traceback" not in outcome.error.metadata
    assert get_active_policy().capture_traceback is True


def test_explicit_policy_overrides_context() -> None:
    def exit_now() -> None:
        raise SystemExit(0)

    with use_trap_policy(TrapPolicy(trap_base_exceptions=False)):
        outcome = run_protected(exit_now, policy=TrapPolicy(trap_base_exceptions=True))

    assert exception_name(outcome.error) == "SystemExit"


def test_malformed_env_falls_back_to_default_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CAPTURE_TRACEBACK_ENV_VAR, "maybe")
    calls: list[int] = []

    with pytest.warns(TrapWarning, match=f"Invalid boolean for {CAPTURE_TRACEBACK_ENV_VAR}"):
        succeeded = run_protected(lambda: calls.append(1))
    with pytest.warns(TrapWarning, match="Using the default trap policy"):
        failed = run_protected(_fail)

    assert succeeded.succeeded is True
    assert calls == [1]
    assert failed.error is not None
    assert failed.error.metadata is not None
    assert "traceback" not in failed.error.metadata
    with pytest.raises(TrapConfigError):
        get_active_policy()


def test_malformed_env_does_not_escape_under_warnings_as_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv(TRAP_BASE_EXCEPTIONS_ENV_VAR, "sometimes")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        outcome = run_protected(_fail)

    assert exception_name(outcome.error) == "RuntimeError"
