import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.db.memory import MemoryStore
from app.deps import get_store
from app.models.transaction import (
    Transaction,
    TransactionCreate,
    TransactionUpdate,
    TransactionWithCategory,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[TransactionWithCategory])
def list_transactions(store: MemoryStore = Depends(get_store)):
    return store.get_all_transactions()


@router.get("/{transaction_id}", response_model=TransactionWithCategory)
def get_transaction(transaction_id: int, store: MemoryStore = Depends(get_store)):
    transaction = store.get_transaction(transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(transaction: TransactionCreate, store: MemoryStore = Depends(get_store)):
    created = store.create_transaction(transaction)
    logger.info(f"Created {created.type.value} transaction {created.id} for {created.amount}")
    return created


@router.put("/{transaction_id}", response_model=Transaction)
def update_transaction(
    transaction_id: int,
    transaction_update: TransactionUpdate,
    store: MemoryStore = Depends(get_store),
):
    # An empty body is a valid no-op update; it still 404s on a missing id
    updated = store.update_transaction(transaction_id, transaction_update.changes())
    if not updated:
        raise HTTPException(status_code=404, detail="Transaction not found")
    logger.info(f"Updated transaction {transaction_id}")
    return updated


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: int, store: MemoryStore = Depends(get_store)):
    if not store.delete_transaction(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
    logger.info(f"Deleted transaction {transaction_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
