"""
Party service: registers customers and suppliers.

Registering a party with an opening balance posts that balance
as the party's first ledger entry, so current_balance is never
set by hand.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice_ledger.models.enums import PartyType
from backoffice_ledger.schemas.party import PartyCreate
from backoffice_ledger.services.errors import NotFoundError
from backoffice_ledger.services.ledger_books import get_book
from backoffice_ledger.services.ledger_lines import ZERO
from backoffice_ledger.services.posting_service import BalancePoster


class PartyService:

    def __init__(self, db: Session):
        self.db = db
        self.poster = BalancePoster(db)

    def create_party(self, party_type: PartyType, request: PartyCreate):
        """Create a customer or supplier and post its opening balance."""
        book = get_book(party_type)

        party = book.party_model(
            name=request.name,
            mobile_no=request.mobile_no,
            current_balance=ZERO,
        )
        self.db.add(party)
        self.db.flush()

        self.poster.open_balance(
            book.party_type,
            party.id,
            request.opening_balance,
            on=request.opening_date,
        )
        return party

    def get_party(self, party_type: PartyType, party_id: int):
        book = get_book(party_type)
        party = self.db.get(book.party_model, party_id)
        if not party:
            raise NotFoundError(f"{book.label} {party_id} not found")
        return party

    def list_parties(self, party_type: PartyType) -> list:
        """All parties of a type, by name."""
        model = get_book(party_type).party_model
        parties = self.db.execute(
            select(model).order_by(model.name, model.id)
        ).scalars().all()
        return list(parties)
