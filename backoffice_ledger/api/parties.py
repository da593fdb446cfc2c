"""
Customer and supplier API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backoffice_ledger.models.base import get_db
from backoffice_ledger.models.enums import PartyType
from backoffice_ledger.schemas.party import PartyCreate, PartyResponse
from backoffice_ledger.services.errors import NotFoundError, PostingConflictError
from backoffice_ledger.services.party_service import PartyService
from backoffice_ledger.services.posting_service import run_with_retry

router = APIRouter(tags=["Parties"])


def _create(party_type: PartyType, request: PartyCreate, db: Session):
    service = PartyService(db)
    try:
        return run_with_retry(
            db, lambda: service.create_party(party_type, request)
        )
    except PostingConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


def _get(party_type: PartyType, party_id: int, db: Session):
    try:
        return PartyService(db).get_party(party_type, party_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# --- Customer Endpoints ---

@router.post("/customers", response_model=PartyResponse, status_code=201)
def create_customer(request: PartyCreate, db: Session = Depends(get_db)):
    """
    Register a customer.

    A non-zero opening balance is posted as the first ledger entry.
    """
    return _create(PartyType.CUSTOMER, request, db)


@router.get("/customers", response_model=list[PartyResponse])
def list_customers(db: Session = Depends(get_db)):
    return PartyService(db).list_parties(PartyType.CUSTOMER)


@router.get("/customers/{customer_id}", response_model=PartyResponse)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return _get(PartyType.CUSTOMER, customer_id, db)


# --- Supplier Endpoints ---

@router.post("/suppliers", response_model=PartyResponse, status_code=201)
def create_supplier(request: PartyCreate, db: Session = Depends(get_db)):
    """
    Register a supplier.

    A non-zero opening balance is posted as the first ledger entry.
    """
    return _create(PartyType.SUPPLIER, request, db)


@router.get("/suppliers", response_model=list[PartyResponse])
def list_suppliers(db: Session = Depends(get_db)):
    return PartyService(db).list_parties(PartyType.SUPPLIER)


@router.get("/suppliers/{supplier_id}", response_model=PartyResponse)
def get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return _get(PartyType.SUPPLIER, supplier_id, db)
