"""Tests for the constructor-initialized-member assertion."""

import pytest

from idiomguard.assertions import ConstructorInitializedMemberAssertion
from idiomguard.config import ConstructorConfig
from idiomguard.errors import ConstructionWiringViolation, ValueGenerationError
from idiomguard.reflection import constructors_of, methods_of
from tests.fixtures import sample_types as samples

pytestmark = pytest.mark.wiring


@pytest.fixture
def assertion(factory) -> ConstructorInitializedMemberAssertion:
    return ConstructorInitializedMemberAssertion(factory)


class TestWiredConstructors:
    """Constructors whose arguments are exposed verbatim pass."""

    def test_read_only_properties(self, assertion):
        assertion.verify(samples.WiredRecord)

    def test_constructor_member(self, assertion):
        assertion.verify(constructors_of(samples.WiredRecord))

    def test_frozen_dataclass(self, assertion):
        assertion.verify(samples.Money)

    def test_pydantic_model(self, assertion):
        assertion.verify(samples.Customer)

    def test_names_match_case_insensitively(self, assertion):
        assertion.verify(samples.CaseInsensitiveRecord)

    def test_equal_copy_counts_as_exposed(self, assertion):
        assertion.verify(samples.Copier)

    def test_unmatched_parameters_are_skipped(self, assertion):
        assertion.verify(samples.NoExposedParameters)

    def test_incompatible_types_are_skipped(self, assertion):
        assertion.verify(samples.MismatchedTypes)

    def test_methods_are_ignored(self, assertion):
        assertion.verify(methods_of(samples.Greeter))


class TestMiswiredConstructors:
    """Constructors that do not expose an argument raise a violation."""

    def test_missing_assignment(self, assertion):
        with pytest.raises(ConstructionWiringViolation) as exc_info:
            assertion.verify(samples.MissingValueAssignment)

        violation = exc_info.value
        assert violation.parameter_name == "value"
        assert violation.member_name == "value"
        assert violation.target_name == "value -> value"
        assert "AttributeError" in violation.observed
        assert "MissingValueAssignment" in str(violation)

    def test_swapped_assignment(self, assertion):
        with pytest.raises(ConstructionWiringViolation) as exc_info:
            assertion.verify(samples.SwappedAssignment)

        violation = exc_info.value
        assert violation.parameter_name == "first"
        assert violation.observed.endswith("(the value passed for 'second')")

    def test_case_sensitive_matching(self, factory):
        assertion = ConstructorInitializedMemberAssertion(
            factory, ConstructorConfig(case_sensitive=True)
        )
        # No member is named exactly "UserName", so nothing is compared
        assertion.verify(samples.CaseInsensitiveRecord)

    def test_construction_failure_propagates(self, assertion):
        class Strict:
            def __init__(self, name: str) -> None:
                raise RuntimeError("refusing to build")

            @property
            def name(self) -> str:
                return ""

        with pytest.raises(RuntimeError):
            assertion.verify(Strict)


class TestDistinctValues:
    """Tests for distinct argument generation."""

    def test_values_are_distinct(self, factory):
        factory.freeze(int, 5)
        assertion = ConstructorInitializedMemberAssertion(
            factory, ConstructorConfig(max_distinct_attempts=3)
        )

        class Pair:
            def __init__(self, left: int, right: int) -> None:
                self.left = left
                self.right = right

            left: int
            right: int

        with pytest.raises(ValueGenerationError):
            assertion.verify(Pair)

    def test_distinct_values_for_same_type(self, assertion):
        class Pair:
            left: str
            right: str

            def __init__(self, left: str, right: str) -> None:
                self.left = right
                self.right = left

        with pytest.raises(ConstructionWiringViolation):
            assertion.verify(Pair)


class TestInstanceAttributes:
    """Plain attributes assigned in __init__ are matched by name."""

    def test_plain_attributes_pass(self, assertion):
        assertion.verify(samples.GuardedService)
        assertion.verify(samples.KeywordOnly)

    def test_public_attribute_wins_over_private(self, assertion):
        assertion.verify(samples.PlainRecord)

    def test_swapped_plain_attributes(self, assertion):
        with pytest.raises(ConstructionWiringViolation) as exc_info:
            assertion.verify(samples.PlainSwappedAssignment)

        violation = exc_info.value
        assert violation.parameter_name == "first"
        assert violation.member_name == "first"
        assert violation.observed.endswith("(the value passed for 'second')")

    def test_swapped_private_attributes(self, assertion):
        with pytest.raises(ConstructionWiringViolation) as exc_info:
            assertion.verify(samples.PrivateSwappedAssignment)

        assert exc_info.value.target_name == "first -> _first"

    def test_private_declared_field(self, assertion):
        with pytest.raises(ConstructionWiringViolation) as exc_info:
            assertion.verify(samples.ShoutingLabel)

        assert exc_info.value.member_name == "_label"

    def test_failed_construction_without_exposed_members_is_skipped(self, assertion):
        assertion.verify(samples.Exploding)
