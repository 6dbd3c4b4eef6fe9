import pytest

from mockkit.recording import record_exception, record_exception_async


def do_something_bad():
    raise ValueError("Bad stuff")


async def do_something_bad_async():
    raise ValueError("Bad stuff")


def do_nothing():
    return 1


class TestRecordShould:
    """
    record_exception is for tests that don't test for an exception and don't
    care whether one is raised, but want to look at it if it is.
    Use pytest.raises when the exception is the point of the test.
    """

    @pytest.mark.asyncio
    async def test_capture_a_possible_exception(self):
        ex1 = record_exception(do_something_bad)
        ex2 = await record_exception_async(do_something_bad_async)

        assert ex1 is not None
        assert ex2 is not None
        assert str(ex1) == "Bad stuff"
        assert str(ex2) == "Bad stuff"

    def test_returns_none_when_nothing_is_raised(self):
        assert record_exception(do_nothing) is None

    def test_passes_arguments_through(self):
        error = record_exception(int, "not a number")

        assert isinstance(error, ValueError)

    @pytest.mark.asyncio
    async def test_async_recorder_accepts_a_plain_function(self):
        error = await record_exception_async(do_something_bad)

        assert isinstance(error, ValueError)
        assert str(error) == "Bad stuff"
