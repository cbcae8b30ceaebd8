import inspect

import trapkit


def test_public_api_symbol_list_is_explicit_and_stable() -> None:
    assert trapkit.__all__ == [
        "__version__",
        "ERROR_DOMAIN",
        "TRAPPED_EXCEPTION_CODE",
        "ErrorValue",
        "TrapOutcome",
        "CapturedException",
        "RaisedException",
        "TrapPolicy",
        "TrapHookManager",
        "TrapStartEvent",
        "TrapEndEvent",
        "run_protected",
        "run_protected_async",
        "protected",
        "exception_name",
        "capture_exception",
        "error_value_from_exception",
        "use_trap_policy",
        "use_trap_hooks",
    ]


def test_public_api_function_signatures() -> None:
    expected_parameters = {
        "run_protected": ("callback", "policy", "hooks"),
        "run_protected_async": ("callback", "policy", "hooks"),
        "exception_name": ("error",),
        "capture_exception": ("error", "policy"),
        "error_value_from_exception": ("error", "policy"),
    }

    for name, parameters in expected_parameters.items():
        function = getattr(trapkit, name)
        signature = inspect.signature(function)
        assert tuple(signature.parameters.keys()) == parameters
        assert "return" in function.__annotations__

        for index, parameter in enumerate(signature.parameters.values()):
            if index == 0:
                assert parameter.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
            else:
                assert parameter.kind is inspect.Parameter.KEYWORD_ONLY


def test_public_api_constants() -> None:
    assert trapkit.ERROR_DOMAIN == "trapkit.exception"
    assert trapkit.TRAPPED_EXCEPTION_CODE == 1
    assert trapkit.__version__ == "0.1.0"


def test_public_api_end_to_end() -> None:
    def callback() -> None:
        raise trapkit.RaisedException("TestException", "boom", {"k": "v"})

    succeeded, error = trapkit.run_protected(callback)

    assert succeeded is False
    assert isinstance(error, trapkit.ErrorValue)
    assert trapkit.exception_name(error) == "TestException"
    assert error.user_info == {"k": "v"}
