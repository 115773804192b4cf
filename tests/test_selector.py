"""Tests for zonetrack.selection.selector."""

import pytest

from zonetrack.model.entities import Ability, Map, Usage, Zone
from zonetrack.selection.selector import Index, Name, Selector


@pytest.fixture
def zones():
    return [Zone("North"), Zone("South"), Zone("East")]


class TestParse:
    """Selector.parse: integer text → Index, anything else → Name."""

    def test_digits_become_index(self):
        assert Selector.parse("3") == Index(3)

    def test_zero_is_index(self):
        assert Selector.parse("0") == Index(0)

    def test_text_becomes_name(self):
        assert Selector.parse("North") == Name("North")

    def test_negative_number_is_a_name(self):
        """Only unsigned integers are positions."""
        assert Selector.parse("-1") == Name("-1")

    def test_mixed_text_is_a_name(self):
        assert Selector.parse("2nd floor") == Name("2nd floor")

    def test_empty_text_is_a_name(self):
        assert Selector.parse("") == Name("")

    def test_leading_plus_is_index(self):
        assert Selector.parse("+3") == Index(3)

    def test_only_one_plus_is_stripped(self):
        assert Selector.parse("++3") == Name("++3")

    def test_bare_plus_is_a_name(self):
        assert Selector.parse("+") == Name("+")


class TestAbstractBase:
    def test_selector_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            Selector()

    def test_subclass_must_define_position(self):
        class Partial(Selector):
            __slots__ = ()

        with pytest.raises(TypeError):
            Partial()


class TestResolve:
    def test_name_resolves_first_match(self, zones):
        assert Name("South").resolve(zones) is zones[1]

    def test_duplicate_names_first_occurrence_wins(self):
        dupes = [Zone("A"), Zone("B"), Zone("A")]
        assert Name("A").resolve(dupes) is dupes[0]
        assert Name("A").to_index(dupes) == Index(0)

    def test_unknown_name_is_none(self, zones):
        assert Name("West").resolve(zones) is None

    def test_index_in_bounds(self, zones):
        assert Index(2).resolve(zones) is zones[2]

    def test_index_out_of_bounds_is_none(self, zones):
        assert Index(3).resolve(zones) is None

    def test_empty_collection(self):
        assert Index(0).resolve([]) is None
        assert Name("x").resolve([]) is None

    def test_resolved_entity_is_mutable_in_place(self):
        abilities = [Ability("Jump")]
        Name("Jump").resolve(abilities).add_usage(Usage("Double"))
        assert abilities[0].usage_names() == ["Double"]

    def test_works_for_every_entity_kind(self):
        assert Name("M").resolve([Map("M")]).name == "M"
        assert Name("A").resolve([Ability("A")]).name == "A"
        assert Name("U").resolve([Usage("U")]).name == "U"


class TestConversion:
    def test_to_index(self, zones):
        assert Name("East").to_index(zones) == Index(2)

    def test_to_name(self, zones):
        assert Index(1).to_name(zones) == Name("South")

    def test_to_index_unresolved(self, zones):
        assert Name("West").to_index(zones) is None
        assert Index(9).to_index(zones) is None

    def test_to_name_unresolved(self, zones):
        assert Index(9).to_name(zones) is None

    def test_index_round_trip(self, zones):
        for i in range(len(zones)):
            assert Index(i).to_name(zones).to_index(zones) == Index(i)

    def test_name_round_trip(self, zones):
        for z in zones:
            assert Name(z.name).to_index(zones).to_name(zones) == Name(z.name)

    def test_name_survives_insertion_before_it(self, zones):
        ref = Name("South")
        zones.insert(0, Zone("West"))
        assert ref.resolve(zones).name == "South"

    def test_index_shifts_with_insertion_before_it(self, zones):
        ref = Index(1)
        zones.insert(0, Zone("West"))
        assert ref.resolve(zones).name == "North"


class TestEquality:
    def test_same_form_equal(self):
        assert Index(1) == Index(1)
        assert Name("a") == Name("a")

    def test_index_never_equals_name(self):
        assert Index(0) != Name("0")

    def test_hashable(self):
        assert len({Index(1), Index(1), Name("1")}) == 2
