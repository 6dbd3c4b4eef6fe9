"""
Class fixtures: created once for the test class, shared among all its tests.
"""

from dataclasses import dataclass

import pytest


@dataclass
class ClassFixture:
    count: int = 0


@pytest.fixture(scope="class")
def class_fixture() -> ClassFixture:
    return ClassFixture()


class TestClassFixtureShould:
    @pytest.mark.parametrize("sequence", [1, 2, 3])
    def test_accepts_fixture(self, class_fixture: ClassFixture, sequence: int):
        # Avoid conditional asserts in a test. A separate test per condition is clearer.
        if sequence == 3:
            with pytest.raises(AssertionError):
                assert 1 <= sequence <= 2
        else:
            assert 1 <= sequence <= 2

        class_fixture.count += 1

    def test_fixture_is_shared_by_the_class(self, class_fixture: ClassFixture):
        # runs after the three parametrized cases above (definition order)
        assert class_fixture.count == 3


class TestAnotherClass:
    def test_gets_its_own_fixture(self, class_fixture: ClassFixture):
        assert class_fixture.count == 0
