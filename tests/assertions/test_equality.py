"""Tests for the equality micro-assertions."""

from abc import ABC, abstractmethod
from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from idiomguard.assertions import (
    EqualsNewObjectAssertion,
    EqualsNoneAssertion,
    EqualsSelfAssertion,
    EqualsSuccessiveAssertion,
    HashSuccessiveAssertion,
    equality_assertions,
)
from idiomguard.assertions.equality import overrides_equality, overrides_hash
from idiomguard.config import EqualityConfig
from idiomguard.errors import EqualityContractViolation
from idiomguard.reflection import members_of, methods_of
from idiomguard.valuesource import SpecimenFactory
from tests.fixtures import sample_types as samples

pytestmark = pytest.mark.equality

ALL_ASSERTIONS = [
    EqualsSelfAssertion,
    EqualsNoneAssertion,
    EqualsNewObjectAssertion,
    EqualsSuccessiveAssertion,
    HashSuccessiveAssertion,
]


class TestOverrideDetection:
    """Tests for overrides_equality and overrides_hash."""

    def test_identity_equality(self):
        assert not overrides_equality(samples.IdentityOnly)
        assert not overrides_hash(samples.IdentityOnly)

    def test_value_equality(self):
        assert overrides_equality(samples.Point)
        assert overrides_hash(samples.Point)

    def test_unhashable(self):
        assert overrides_equality(samples.Unhashable)
        assert not overrides_hash(samples.Unhashable)


class TestWellBehavedTypes:
    """Types with a sound equality contract pass every check."""

    @pytest.mark.parametrize("assertion_type", ALL_ASSERTIONS)
    @pytest.mark.parametrize("cls", [samples.Point, samples.Money, samples.Customer])
    def test_passes(self, factory, assertion_type, cls):
        assertion_type(factory).verify(cls)

    def test_bundle(self, factory):
        equality_assertions(factory).verify(samples.Point)

    def test_unhashable_type_skips_hash_check(self, factory):
        equality_assertions(factory).verify(samples.Unhashable)

    @settings(max_examples=30)
    @given(x=st.integers(), y=st.integers())
    def test_point_contract_for_any_coordinates(self, x, y):
        factory = SpecimenFactory()
        factory.register(samples.Point, lambda: samples.Point(x, y))
        equality_assertions(factory).verify(samples.Point)


class TestNotApplicable:
    """Inputs outside the equality contract are silently accepted."""

    @pytest.mark.parametrize("assertion_type", ALL_ASSERTIONS)
    def test_identity_equality_is_skipped(self, assertion_type):
        source = MagicMock()
        assertion_type(source).verify(samples.IdentityOnly)
        source.create.assert_not_called()

    @pytest.mark.parametrize("assertion_type", ALL_ASSERTIONS)
    def test_abstract_class_is_skipped(self, assertion_type):
        class Amount(ABC):
            @abstractmethod
            def value(self) -> int: ...

            def __eq__(self, other):
                return isinstance(other, Amount) and self.value() == other.value()

            def __hash__(self):
                return hash(self.value())

        source = MagicMock()
        assertion_type(source).verify(Amount)
        source.create.assert_not_called()

    @pytest.mark.parametrize("assertion_type", ALL_ASSERTIONS)
    def test_members_are_no_ops(self, assertion_type):
        source = MagicMock()
        assertion_type(source).verify(members_of(samples.NeverEqualsSelf))
        source.create.assert_not_called()

    def test_method_is_not_invoked(self):
        calls = []

        class Tracked:
            def touch(self) -> None:
                calls.append("touch")

        source = MagicMock()
        [touch] = methods_of(Tracked)
        EqualsSelfAssertion(source).verify(touch)

        assert calls == []
        source.create.assert_not_called()

    def test_value_source_is_required(self):
        with pytest.raises(ValueError):
            EqualsSelfAssertion(None)


class TestBrokenTypes:
    """Each invariant reports the type that breaks it."""

    def test_never_equals_self(self, factory):
        with pytest.raises(EqualityContractViolation) as exc_info:
            EqualsSelfAssertion(factory).verify(samples.NeverEqualsSelf)

        violation = exc_info.value
        assert violation.invariant == "equals-self"
        assert violation.declaring_type is samples.NeverEqualsSelf
        assert "NeverEqualsSelf" in str(violation)

    def test_equals_none(self, factory):
        with pytest.raises(EqualityContractViolation) as exc_info:
            EqualsNoneAssertion(factory).verify(samples.EqualsEverything)
        assert exc_info.value.invariant == "equals-none"

    def test_equals_new_object(self, factory):
        with pytest.raises(EqualityContractViolation) as exc_info:
            EqualsNewObjectAssertion(factory).verify(samples.EqualsEverything)
        assert exc_info.value.invariant == "equals-new-object"

    @pytest.mark.parametrize("assertion_type", [EqualsNoneAssertion, EqualsNewObjectAssertion])
    def test_exception_during_comparison(self, factory, assertion_type):
        with pytest.raises(EqualityContractViolation) as exc_info:
            assertion_type(factory).verify(samples.CrashesOnForeign)

        assert exc_info.value.observed.startswith("AttributeError")
        assert isinstance(exc_info.value.__cause__, AttributeError)

    def test_unstable_equality(self, factory):
        with pytest.raises(EqualityContractViolation) as exc_info:
            EqualsSuccessiveAssertion(factory).verify(samples.FlakyEquality)

        assert exc_info.value.invariant == "equals-successive"
        assert exc_info.value.observed == "False, True, False"

    def test_unstable_hash(self, factory):
        with pytest.raises(EqualityContractViolation) as exc_info:
            HashSuccessiveAssertion(factory).verify(samples.FlakyEquality)
        assert exc_info.value.invariant == "hash-successive"

    def test_successive_calls_setting(self, factory):
        assertion = EqualsSuccessiveAssertion(factory, EqualityConfig(successive_calls=4))
        with pytest.raises(EqualityContractViolation) as exc_info:
            assertion.verify(samples.FlakyEquality)
        assert exc_info.value.observed == "False, True, False, True"

    def test_bundle_stops_at_first_broken_invariant(self, factory):
        with pytest.raises(EqualityContractViolation) as exc_info:
            equality_assertions(factory).verify(samples.EqualsEverything)
        assert exc_info.value.invariant == "equals-none"
