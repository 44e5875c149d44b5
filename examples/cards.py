"""Playing cards ordered by a computed sort index."""

from recordkit import compact_repr, define_schema, derive, field

RANKS = "2 3 4 5 6 7 8 9 10 J Q K A".split()
SUITS = "♣ ♢ ♡ ♠".split()


def _set_sort_index(card):
    card.sort_index = RANKS.index(card.rank) * len(SUITS) + SUITS.index(card.suit)


# sort_index comes first, so it is the primary ordering key
card_schema = define_schema(
    [
        field("sort_index", int, init=False, repr=False),
        field("rank", str),
        field("suit", str),
    ],
    generate_order=True,
    frozen=True,
)
Card = derive(card_schema, "Card", post_init=_set_sort_index, repr=lambda c: f"{c.suit}{c.rank}")


def make_french_deck():
    return [Card(r, s) for s in SUITS for r in RANKS]


Deck = derive(define_schema([field("cards", list, default_factory=make_french_deck)]), "Deck", repr=compact_repr)


if __name__ == "__main__":
    queen_of_hearts = Card("Q", "♡")
    ace_of_spades = Card("A", "♠")
    print(queen_of_hearts, ace_of_spades, ace_of_spades > queen_of_hearts)

    print(Deck(sorted(make_french_deck())[:5]))
