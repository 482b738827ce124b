"""Smoke tests for the public package surface."""

import idiomguard
from idiomguard import (
    CompositeAssertion,
    ConstructorInitializedMemberAssertion,
    GuardClauseAssertion,
    IdiomaticAssertion,
    IdiomViolation,
    SpecimenFactory,
    default_assertions,
)
from tests.fixtures import sample_types as samples


class TestPackage:
    """Tests for top-level imports."""

    def test_version_is_exposed(self):
        assert idiomguard.__version__ == "0.1.0"

    def test_assertions_share_the_base_protocol(self):
        factory = SpecimenFactory()
        for assertion in (
            GuardClauseAssertion(factory),
            ConstructorInitializedMemberAssertion(factory),
            CompositeAssertion(),
        ):
            assert isinstance(assertion, IdiomaticAssertion)

    def test_violations_are_assertion_errors(self):
        assert issubclass(IdiomViolation, AssertionError)

    def test_default_assertions_accept_well_behaved_class(self):
        default_assertions().verify(samples.Point)
