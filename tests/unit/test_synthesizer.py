"""Unit tests for derive and the generated record behaviour."""

import copy
import unittest

from recordkit import (
    Comparison,
    FieldSpec,
    FrozenRecordError,
    IncomparableTypesError,
    Ordering,
    Record,
    UnhashableError,
    UninitializedFieldError,
    assign,
    compact_repr,
    compare,
    construct,
    define_schema,
    derive,
    equals,
    equals_outcome,
    field,
    record_hash,
    represent,
)

RANKS = "2 3 4 5 6 7 8 9 10 J Q K A".split()
SUITS = "♣ ♢ ♡ ♠".split()

POSITION_SCHEMA = define_schema(
    [
        FieldSpec(name="name", declared_type=str),
        FieldSpec(name="lon", declared_type=float, default=0.0),
        FieldSpec(name="lat", declared_type=float, default=0.0),
    ],
    frozen=True,
)
Position = derive(POSITION_SCHEMA, "Position")


def _set_sort_index(card: Record) -> None:
    card.sort_index = RANKS.index(card.rank) * len(SUITS) + SUITS.index(card.suit)


CARD_SCHEMA = define_schema(
    [
        field("sort_index", int, init=False, repr=False),
        field("rank", str),
        field("suit", str),
    ],
    generate_order=True,
    frozen=True,
)
Card = derive(CARD_SCHEMA, "Card", post_init=_set_sort_index)


class TestConstruction(unittest.TestCase):
    """Unit tests for the generated constructor."""

    def test_should_bind_positional_and_keyword_arguments(self) -> None:
        """Test that positional and keyword arguments bind in declaration order."""
        # arrange / act
        sut = Position("Oslo", lat=59.9, lon=10.8)

        # assert
        self.assertEqual(sut.name, "Oslo")
        self.assertEqual(sut.lon, 10.8)
        self.assertEqual(sut.lat, 59.9)

    def test_should_bind_literal_defaults_for_omitted_fields(self) -> None:
        """Test that omitted fields receive their default value."""
        # arrange / act
        sut = Position("Null Island")

        # assert
        self.assertEqual((sut.lon, sut.lat), (0.0, 0.0))

    def test_should_construct_via_construct_function(self) -> None:
        """Test that construct() is equivalent to calling the type."""
        # arrange / act
        sut = construct(Position, "Oslo", 10.8, 59.9)

        # assert
        self.assertIsInstance(sut, Position)
        self.assertEqual(sut, Position("Oslo", 10.8, 59.9))

    def test_should_give_each_instance_its_own_factory_value(self) -> None:
        """Test that default_factory values are not shared between instances."""
        # arrange
        Hand = derive(define_schema([field("cards", list, default_factory=list)]), "Hand")
        first = Hand()
        second = Hand()

        # act
        first.cards.append("A♠")

        # assert
        self.assertEqual(first.cards, ["A♠"])
        self.assertEqual(len(second.cards), 0)

    def test_should_invoke_factory_once_per_instance(self) -> None:
        """Test that the factory runs exactly once for each construction."""
        # arrange
        calls = []

        def factory() -> list:
            calls.append(1)
            return []

        Bag = derive(define_schema([field("items", list, default_factory=factory)]), "Bag")

        # act
        Bag()
        Bag()
        Bag(items=["supplied"])

        # assert
        self.assertEqual(len(calls), 2)

    def test_should_reject_too_many_positional_arguments(self) -> None:
        """Test that extra positional arguments raise TypeError."""
        # arrange / act / assert
        with self.assertRaises(TypeError):
            Position("Oslo", 10.8, 59.9, "extra")

    def test_should_reject_unknown_keyword_argument(self) -> None:
        """Test that unknown keyword arguments raise TypeError."""
        # arrange / act / assert
        with self.assertRaises(TypeError) as ctx:
            Position("Oslo", altitude=10)
        self.assertIn("altitude", str(ctx.exception))

    def test_should_reject_duplicate_argument(self) -> None:
        """Test that a field given positionally and by keyword raises TypeError."""
        # arrange / act / assert
        with self.assertRaises(TypeError):
            Position("Oslo", name="Bergen")

    def test_should_reject_missing_required_argument(self) -> None:
        """Test that a required field cannot be omitted."""
        # arrange / act / assert
        with self.assertRaises(TypeError) as ctx:
            Position(lon=1.0)
        self.assertIn("name", str(ctx.exception))

    def test_should_not_accept_non_init_field_as_argument(self) -> None:
        """Test that init=False fields are not constructor parameters."""
        # arrange / act / assert
        with self.assertRaises(TypeError):
            Card("Q", "♡", sort_index=0)

    def test_should_not_run_factories_when_arguments_are_invalid(self) -> None:
        """Test that argument errors are raised before any factory runs."""
        # arrange
        calls = []
        Bag = derive(
            define_schema([field("label", str), field("items", list, default_factory=lambda: calls.append(1))]),
            "Bag",
        )

        # act
        with self.assertRaises(TypeError):
            Bag(colour="red")

        # assert
        self.assertEqual(calls, [])

    def test_should_propagate_hook_errors(self) -> None:
        """Test that a failing post-construction hook fails construction."""

        # arrange
        def hook(record: Record) -> None:
            msg = "bad rank"
            raise ValueError(msg)

        Strict = derive(define_schema([field("rank", str)]), "Strict", post_init=hook)

        # act / assert
        with self.assertRaises(ValueError):
            Strict("Z")

    def test_should_bind_default_of_non_init_field(self) -> None:
        """Test that init=False fields with a default are bound at construction."""
        # arrange
        Counter = derive(define_schema([field("label", str), field("count", int, default=0, init=False)]), "Counter")

        # act
        sut = Counter("clicks")

        # assert
        self.assertEqual(sut.count, 0)

    def test_should_bind_only_defaults_when_init_is_not_generated(self) -> None:
        """Test that generate_init=False yields a parameterless constructor."""
        # arrange
        Config = derive(define_schema([field("retries", int, default=3)], generate_init=False), "Config")

        # act
        sut = Config()

        # assert
        self.assertEqual(sut.retries, 3)
        with self.assertRaises(TypeError):
            Config(5)


class TestPostInitHook(unittest.TestCase):
    """Unit tests for the post-construction hook."""

    def test_should_compute_field_excluded_from_init(self) -> None:
        """Test that the hook populates computed fields, even on frozen records."""
        # arrange / act
        sut = Card("Q", "♡")

        # assert
        self.assertEqual(sut.sort_index, 10 * 4 + 2)

    def test_should_allow_subclass_to_override_post_init(self) -> None:
        """Test that subclasses can define __post_init__ directly."""
        # arrange
        Base = derive(define_schema([field("text", str), field("length", int, init=False)]), "Base")

        class Measured(Base):
            def __post_init__(self) -> None:
                self.length = len(self.text)

        # act
        sut = Measured("hello")

        # assert
        self.assertEqual(sut.length, 5)

    def test_should_raise_uninitialized_field_error_when_hook_skips_field(self) -> None:
        """Test that reading a never-assigned field raises UninitializedFieldError."""
        # arrange
        Invoice = derive(define_schema([field("amount", float), field("total", float, init=False)]), "Invoice")
        sut = Invoice(10.0)

        # act / assert
        with self.assertRaises(UninitializedFieldError) as ctx:
            _ = sut.total
        self.assertEqual(ctx.exception.field_name, "total")
        self.assertFalse(hasattr(sut, "total"))

    def test_should_raise_plain_attribute_error_for_unknown_attribute(self) -> None:
        """Test that unknown attributes are not reported as uninitialized fields."""
        # arrange
        sut = Position("Oslo")

        # act / assert
        with self.assertRaises(AttributeError) as ctx:
            _ = sut.altitude
        self.assertNotIsInstance(ctx.exception, UninitializedFieldError)


class TestEquality(unittest.TestCase):
    """Unit tests for generated equality."""

    def test_should_be_equal_for_same_field_values(self) -> None:
        """Test that records with identical compared fields are equal."""
        # arrange
        a = Position("Oslo", 10.8, 59.9)
        b = Position("Oslo", 10.8, 59.9)

        # act / assert
        self.assertEqual(a, b)
        self.assertTrue(equals(a, b))
        self.assertIs(equals_outcome(a, b), Comparison.EQUAL)

    def test_should_not_be_equal_for_different_values(self) -> None:
        """Test that a differing field makes records unequal."""
        # arrange
        a = Position("Oslo", 10.8, 59.9)
        b = Position("Oslo", 10.8, 60.0)

        # act / assert
        self.assertNotEqual(a, b)
        self.assertIs(equals_outcome(a, b), Comparison.NOT_EQUAL)

    def test_should_not_be_equal_to_other_record_type_with_same_values(self) -> None:
        """Test that records of different types are never equal and never raise."""
        # arrange
        Location = derive(POSITION_SCHEMA, "Location")
        a = Position("Oslo", 10.8, 59.9)
        b = Location("Oslo", 10.8, 59.9)

        # act / assert
        self.assertFalse(a == b)
        self.assertTrue(a != b)
        self.assertFalse(equals(a, b))
        self.assertIs(equals_outcome(a, b), Comparison.INCOMPARABLE)

    def test_should_not_be_equal_to_plain_tuple(self) -> None:
        """Test that comparing against a non-record returns not equal."""
        # arrange / act / assert
        self.assertNotEqual(Position("Oslo", 10.8, 59.9), ("Oslo", 10.8, 59.9))

    def test_should_ignore_fields_excluded_from_compare(self) -> None:
        """Test that include_in_compare=False fields do not affect equality."""
        # arrange
        Tagged = derive(define_schema([field("value", int), field("note", str, default="", compare=False)]), "Tagged")

        # act / assert
        self.assertEqual(Tagged(1, "first"), Tagged(1, "second"))

    def test_should_compare_by_identity_without_generated_eq(self) -> None:
        """Test that generate_eq=False keeps identity equality."""
        # arrange
        Handle = derive(define_schema([field("fd", int)], generate_eq=False), "Handle")
        a = Handle(3)
        b = Handle(3)

        # act / assert
        self.assertNotEqual(a, b)
        self.assertEqual(a, a)
        self.assertFalse(equals(a, b))


class TestOrdering(unittest.TestCase):
    """Unit tests for generated ordering."""

    def test_should_order_by_computed_sort_index(self) -> None:
        """Test that a computed first field becomes the primary sort key."""
        # arrange
        queen_of_hearts = Card("Q", "♡")
        ace_of_spades = Card("A", "♠")

        # act / assert
        self.assertTrue(ace_of_spades > queen_of_hearts)
        self.assertIs(compare(ace_of_spades, queen_of_hearts), Ordering.GREATER)
        self.assertIs(compare(queen_of_hearts, ace_of_spades), Ordering.LESS)

    def test_should_sort_deck(self) -> None:
        """Test that sorted() uses the generated ordering."""
        # arrange
        deck = [Card(r, s) for s in SUITS for r in RANKS]

        # act
        result = sorted(deck, reverse=True)

        # assert
        self.assertEqual((result[0].rank, result[0].suit), ("A", "♠"))
        self.assertEqual((result[-1].rank, result[-1].suit), ("2", "♣"))

    def test_should_order_lexicographically_in_declaration_order(self) -> None:
        """Test that ties on the first field are broken by the next."""
        # arrange
        Version = derive(define_schema([field("major", int), field("minor", int)], generate_order=True), "Version")

        # act / assert
        self.assertLess(Version(1, 9), Version(2, 0))
        self.assertLess(Version(1, 2), Version(1, 10))
        self.assertLessEqual(Version(1, 2), Version(1, 2))
        self.assertIs(compare(Version(1, 2), Version(1, 2)), Ordering.EQUAL)

    def test_should_raise_when_ordering_different_record_types(self) -> None:
        """Test that ordering across types raises IncomparableTypesError."""
        # arrange
        OtherCard = derive(CARD_SCHEMA, "OtherCard", post_init=_set_sort_index)

        # act / assert
        with self.assertRaises(IncomparableTypesError):
            _ = Card("Q", "♡") < OtherCard("A", "♠")
        with self.assertRaises(IncomparableTypesError):
            compare(Card("Q", "♡"), OtherCard("A", "♠"))

    def test_should_raise_when_ordering_against_non_record(self) -> None:
        """Test that ordering against a plain value raises IncomparableTypesError."""
        # arrange / act / assert
        with self.assertRaises(IncomparableTypesError):
            _ = Card("Q", "♡") >= 5

    def test_should_raise_when_ordering_not_generated(self) -> None:
        """Test that compare() rejects types derived without ordering."""
        # arrange / act / assert
        with self.assertRaises(IncomparableTypesError):
            compare(Position("Oslo"), Position("Bergen"))
        with self.assertRaises(TypeError):
            _ = Position("Oslo") < Position("Bergen")


class TestRepresentation(unittest.TestCase):
    """Unit tests for generated representations."""

    def test_should_render_fields_in_declaration_order(self) -> None:
        """Test the default TypeName(field=value, ...) representation."""
        # arrange
        sut = Position("Oslo", 10.8, 59.9)

        # act
        result = represent(sut)

        # assert
        self.assertEqual(result, "Position(name='Oslo', lon=10.8, lat=59.9)")
        self.assertEqual(repr(sut), result)

    def test_should_omit_fields_excluded_from_repr(self) -> None:
        """Test that include_in_repr=False fields are not rendered."""
        # arrange / act
        result = repr(Card("Q", "♡"))

        # assert
        self.assertEqual(result, "Card(rank='Q', suit='♡')")

    def test_should_replace_repr_with_custom_renderer(self) -> None:
        """Test that derive(repr=...) replaces the generated representation."""
        # arrange
        Compact = derive(CARD_SCHEMA, "Compact", post_init=_set_sort_index, repr=compact_repr)

        # act
        result = repr(Compact("Q", "♡"))

        # assert
        self.assertEqual(result, "Compact(Q, ♡)")

    def test_should_allow_subclass_repr_override(self) -> None:
        """Test that subclasses may override __repr__."""

        # arrange
        class PrettyCard(Card):
            __slots__ = ()

            def __repr__(self) -> str:
                return f"{self.suit}{self.rank}"

        # act / assert
        self.assertEqual(repr(PrettyCard("A", "♠")), "♠A")

    def test_should_handle_self_referencing_records(self) -> None:
        """Test that recursive structures do not recurse infinitely."""
        # arrange
        Node = derive(define_schema([field("children", list, default_factory=list)]), "Node")
        sut = Node()
        sut.children.append(sut)

        # act
        result = repr(sut)

        # assert
        self.assertEqual(result, "Node(children=[...])")

    def test_should_keep_object_repr_when_not_generated(self) -> None:
        """Test that generate_repr=False leaves the default object representation."""
        # arrange
        Opaque = derive(define_schema([field("secret", str)], generate_repr=False), "Opaque")

        # act
        result = repr(Opaque("hunter2"))

        # assert
        self.assertNotIn("hunter2", result)


class TestFrozen(unittest.TestCase):
    """Unit tests for frozen records."""

    def test_should_reject_assignment_after_construction(self) -> None:
        """Test that assigning a frozen field raises and keeps the old value."""
        # arrange
        sut = Position("Oslo", 10.8, 59.9)

        # act
        with self.assertRaises(FrozenRecordError):
            assign(sut, "name", "Stockholm")
        with self.assertRaises(FrozenRecordError):
            sut.name = "Stockholm"

        # assert
        self.assertEqual(sut.name, "Oslo")

    def test_should_reject_deletion(self) -> None:
        """Test that deleting a frozen field raises FrozenRecordError."""
        # arrange
        sut = Position("Oslo")

        # act / assert
        with self.assertRaises(FrozenRecordError):
            del sut.lat

    def test_should_freeze_only_shallowly(self) -> None:
        """Test that mutable values reachable through a frozen field stay mutable."""
        # arrange
        Team = derive(define_schema([field("members", list, default_factory=list)], frozen=True), "Team")
        sut = Team()

        # act
        sut.members.append("ada")

        # assert
        self.assertEqual(sut.members, ["ada"])

    def test_should_allow_assignment_on_mutable_record(self) -> None:
        """Test that non-frozen records accept assignment."""
        # arrange
        Point = derive(define_schema([field("x", int), field("y", int)]), "Point")
        sut = Point(1, 2)

        # act
        assign(sut, "x", 5)
        sut.y = 6

        # assert
        self.assertEqual((sut.x, sut.y), (5, 6))

    def test_should_reject_assignment_of_unknown_field(self) -> None:
        """Test that assign() only accepts declared fields."""
        # arrange
        Point = derive(define_schema([field("x", int)]), "Point")

        # act / assert
        with self.assertRaises(AttributeError):
            assign(Point(1), "z", 3)


class TestHashing(unittest.TestCase):
    """Unit tests for generated hashing."""

    def test_should_hash_equal_frozen_records_equally(self) -> None:
        """Test that frozen records hash consistently with equality."""
        # arrange
        a = Position("Oslo", 10.8, 59.9)
        b = Position("Oslo", 10.8, 59.9)

        # act / assert
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(record_hash(a), record_hash(b))
        self.assertEqual(len({a, b}), 1)

    def test_should_be_unhashable_when_mutable(self) -> None:
        """Test that mutable equality-bearing records refuse to hash."""
        # arrange
        Point = derive(define_schema([field("x", int)]), "Point")

        # act / assert
        with self.assertRaises(UnhashableError):
            hash(Point(1))
        with self.assertRaises(TypeError):
            {Point(1): "origin"}  # noqa: B018

    def test_should_hash_mutable_record_with_unsafe_hash(self) -> None:
        """Test that unsafe_hash forces a field-based hash."""
        # arrange
        Point = derive(define_schema([field("x", int)], unsafe_hash=True), "Point")

        # act / assert
        self.assertEqual(hash(Point(1)), hash(Point(1)))

    def test_should_be_unhashable_when_frozen_without_eq(self) -> None:
        """Test that frozen records without generated equality are unhashable."""
        # arrange
        Token = derive(define_schema([field("value", str)], frozen=True, generate_eq=False), "Token")

        # act / assert
        with self.assertRaises(UnhashableError):
            record_hash(Token("abc"))

    def test_should_exclude_fields_from_hash(self) -> None:
        """Test that include_in_hash=False fields do not change the hash."""
        # arrange
        Entry = derive(
            define_schema([field("key", str), field("hits", int, default=0, hash=False)], frozen=True),
            "Entry",
        )

        # act / assert
        self.assertEqual(hash(Entry("a", 1)), hash(Entry("a", 2)))


class TestStorage(unittest.TestCase):
    """Unit tests for slot storage and copying."""

    def test_should_store_fields_in_slots(self) -> None:
        """Test that derived records have no per-instance __dict__ by default."""
        # arrange
        sut = Position("Oslo")

        # act / assert
        self.assertFalse(hasattr(sut, "__dict__"))
        self.assertIn("name", Position.__slots__)

    def test_should_use_instance_dict_without_slots(self) -> None:
        """Test that slots=False records carry a __dict__."""
        # arrange
        Loose = derive(POSITION_SCHEMA, "Loose", slots=False)

        # act
        sut = Loose("Oslo")

        # assert
        self.assertEqual(sut.__dict__["name"], "Oslo")
        with self.assertRaises(FrozenRecordError):
            sut.name = "Bergen"

    def test_should_copy_frozen_record(self) -> None:
        """Test that copy and deepcopy produce equal, still-frozen records."""
        # arrange
        sut = Position("Oslo", 10.8, 59.9)

        # act
        shallow = copy.copy(sut)
        deep = copy.deepcopy(sut)

        # assert
        self.assertEqual(shallow, sut)
        self.assertEqual(deep, sut)
        with self.assertRaises(FrozenRecordError):
            deep.name = "Bergen"

    def test_should_keep_unbound_fields_unbound_when_copied(self) -> None:
        """Test that copying preserves uninitialized fields."""
        # arrange
        Invoice = derive(define_schema([field("amount", float), field("total", float, init=False)]), "Invoice")

        # act
        result = copy.copy(Invoice(10.0))

        # assert
        self.assertEqual(result.amount, 10.0)
        with self.assertRaises(UninitializedFieldError):
            _ = result.total

    def test_should_expose_match_args(self) -> None:
        """Test that __match_args__ lists the constructor fields."""
        # arrange / act / assert
        self.assertEqual(Card.__match_args__, ("rank", "suit"))

    def test_should_set_module_to_caller(self) -> None:
        """Test that derived types report the calling module."""
        # arrange / act / assert
        self.assertEqual(Position.__module__, __name__)

    def test_should_reject_invalid_type_name(self) -> None:
        """Test that derive() requires an identifier name."""
        # arrange / act / assert
        with self.assertRaises(ValueError):
            derive(POSITION_SCHEMA, "not a name")
