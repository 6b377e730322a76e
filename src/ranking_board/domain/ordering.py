"""Card order ledger for a ranking session.

The ledger is the authoritative rank sequence of a session: position 0 is
rank 1. It is persisted as one value on the session row, so every change is
a whole-value replacement and concurrent writers resolve as last-write-wins.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from uuid import UUID

from ranking_board.domain.cards import Card
from ranking_board.domain.errors import OrderCardinalityMismatch, UnknownCardInOrder


@dataclass(frozen=True)
class CardOrder:
    """Immutable sequence of card ids in rank order."""

    ids: tuple[UUID, ...] = ()

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self):
        return iter(self.ids)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self.ids

    def append(self, card_id: UUID) -> "CardOrder":
        """Return a ledger with ``card_id`` added as the lowest rank.

        Only used for freshly created cards, so presence is not re-checked.
        """
        return CardOrder((*self.ids, card_id))

    def remove(self, card_id: UUID) -> "CardOrder":
        """Return a ledger without ``card_id``, keeping the others in order."""
        return CardOrder(tuple(item for item in self.ids if item != card_id))

    def replace(self, new_order: Sequence[UUID]) -> "CardOrder":
        """Return ``new_order`` as the ledger after checking it is a permutation.

        Raises:
            OrderCardinalityMismatch: ``new_order`` has a different length or
                repeats an id.
            UnknownCardInOrder: ``new_order`` names an id outside the ledger.
        """
        candidate = tuple(new_order)
        if len(candidate) != len(self.ids) or len(set(candidate)) != len(candidate):
            raise OrderCardinalityMismatch()
        current = set(self.ids)
        for card_id in candidate:
            if card_id not in current:
                raise UnknownCardInOrder()
        return CardOrder(candidate)


def reconcile(order: Iterable[UUID], cards: Iterable[Card]) -> list[Card]:
    """Align a stored order with the cards that actually exist.

    Ids without a matching card are skipped, as are repeated ids. Cards the
    order does not mention are appended after the ranked ones, oldest first.
    """
    by_id = {card.id: card for card in cards}
    ranked: list[Card] = []
    seen: set[UUID] = set()
    for card_id in order:
        card = by_id.get(card_id)
        if card is None or card_id in seen:
            continue
        seen.add(card_id)
        ranked.append(card)
    strays = sorted(
        (card for card_id, card in by_id.items() if card_id not in seen),
        key=lambda card: (card.created_at, str(card.id)),
    )
    return ranked + strays
