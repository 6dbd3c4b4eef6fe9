import pytest

from mockkit.exceptions import ArityMismatch, UnknownOperation, VerificationFailed
from mockkit.mocking import Mock, any_value, at_least, between, eq, exactly, never, once
from mockkit.models import Student


class TestVerify:
    """
    Tests covering Mock.verify().

    Rationale:
      - verify() counts recorded calls matching the given matchers; no setup is required.
      - A failure is an AssertionError, so pytest reports it as a test failure.
    """

    def test_exactly_zero_before_and_after_a_call(self, value_mock: Mock):
        value_mock.verify("get_value", eq(1), times=exactly(0))

        value_mock.object.get_value(1)

        with pytest.raises(VerificationFailed):
            value_mock.verify("get_value", eq(1), times=exactly(0))

    def test_counts_only_matching_calls(self, value_mock: Mock):
        value_mock.setup("get_value", eq(1)).returns(10)

        value_mock.object.get_value(1)
        value_mock.object.get_value(1)
        value_mock.object.get_value(2)

        value_mock.verify("get_value", eq(1), times=exactly(2))
        value_mock.verify("get_value", eq(2), times=exactly(1))
        value_mock.verify("get_value", any_value(), times=3)

    def test_no_matchers_counts_every_call(self, value_mock: Mock):
        value_mock.object.get_value(1)
        value_mock.object.get_value(2)

        value_mock.verify("get_value", times=2)
        value_mock.verify("lookup", times=never())

    def test_default_times_is_at_least_once(self, value_mock: Mock):
        with pytest.raises(VerificationFailed):
            value_mock.verify("get_value")

        value_mock.object.get_value(1)
        value_mock.verify("get_value")

    def test_failure_describes_expected_and_actual(self, value_mock: Mock):
        value_mock.object.get_value(5)

        with pytest.raises(VerificationFailed) as exc:
            value_mock.verify("get_value", 1, times=once())

        error = exc.value
        assert isinstance(error, AssertionError)
        assert error.expected == "once"
        assert error.actual == 0
        assert error.operation == "get_value"
        assert "get_value(5)" in str(error)

    def test_range_expectations(self, value_mock: Mock):
        for _ in range(3):
            value_mock.object.get_value(1)

        value_mock.verify("get_value", 1, times=between(2, 4))
        value_mock.verify("get_value", 1, times=at_least(3))
        with pytest.raises(VerificationFailed):
            value_mock.verify("get_value", 1, times=between(1, 3, inclusive=False))

    def test_verify_validates_operation_and_arity(self, value_mock: Mock):
        with pytest.raises(UnknownOperation):
            value_mock.verify("missing")
        with pytest.raises(ArityMismatch):
            value_mock.verify("get_value", 1, 2)


class TestVerifyNoOtherCalls:
    def test_passes_when_every_call_was_verified(self, value_mock: Mock):
        value_mock.setup("get_value", eq(1)).returns(10)
        value_mock.object.get_value(1)
        value_mock.object.get_value(1)
        value_mock.object.get_value(2)

        value_mock.verify("get_value", eq(2), times=exactly(1))
        with pytest.raises(VerificationFailed) as exc:
            value_mock.verify_no_other_calls()
        assert exc.value.actual == 2

        value_mock.verify("get_value", eq(1), times=exactly(2))
        value_mock.verify_no_other_calls()

    def test_never_expectations_do_not_mark_anything(self, student_service_mock: Mock):
        student_service_mock.object.get_student(1)

        student_service_mock.verify("get_student", 1, times=once())
        student_service_mock.verify("get_student", 2, times=never())
        student_service_mock.verify_no_other_calls()

    def test_failed_verify_marks_nothing(self, value_mock: Mock):
        value_mock.object.get_value(1)
        value_mock.object.get_value(1)

        with pytest.raises(VerificationFailed):
            value_mock.verify("get_value", 1, times=once())
        with pytest.raises(VerificationFailed):
            value_mock.verify_no_other_calls()

    def test_empty_mock_passes(self, value_mock: Mock):
        value_mock.verify_no_other_calls()


class TestVerifyAll:
    def test_fails_when_a_verifiable_setup_never_matched(self, student_service_mock: Mock, john: Student):
        student_service_mock.setup("get_student", 99).returns(john).verifiable()
        student_service_mock.setup("get_student", 1).returns(john)

        with pytest.raises(VerificationFailed) as exc:
            student_service_mock.verify_all()

        assert exc.value.actual == 1
        assert "get_student(99)" in str(exc.value)

    def test_passes_once_every_verifiable_setup_matched(self, student_service_mock: Mock, john: Student):
        student_service_mock.setup("get_student", 99).returns(john).verifiable()

        assert student_service_mock.object.get_student(99) == john

        student_service_mock.verify_all()

    def test_non_verifiable_setups_are_ignored(self, student_service_mock: Mock):
        student_service_mock.setup("process").returns(1)

        student_service_mock.verify_all()

    def test_marks_calls_of_verifiable_setups_as_verified(self, student_service_mock: Mock):
        student_service_mock.setup("process").returns(1).verifiable()
        student_service_mock.object.process()

        student_service_mock.verify_all()
        student_service_mock.verify_no_other_calls()

    def test_reset_calls_makes_verifiable_setups_fail_again(self, student_service_mock: Mock):
        student_service_mock.setup("process").returns(1).verifiable()
        student_service_mock.object.process()
        student_service_mock.verify_all()

        student_service_mock.reset_calls()

        with pytest.raises(VerificationFailed):
            student_service_mock.verify_all()


class TestMockFactoryFixture:
    def test_creates_mocks_with_options(self, mock_factory, value_contract):
        mock = mock_factory(value_contract, behavior="strict", name="values")

        assert mock.strict
        assert mock.name == "values"

    def test_verifiable_setups_are_checked_at_teardown(self, mock_factory, value_contract):
        mock = mock_factory(value_contract)
        mock.setup("get_value", 1).returns(1).verifiable()

        # teardown runs verify_all(); this call satisfies it
        assert mock.object.get_value(1) == 1
