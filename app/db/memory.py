import logging
import threading
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from app.models.category import Category, CategoryCreate
from app.models.common import EntryType
from app.models.transaction import Transaction, TransactionCreate, TransactionWithCategory
from app.models.user import User, UserCreate

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CATEGORIES = [
    CategoryCreate(name="Food", color="#3b82f6", type=EntryType.EXPENSE),
    CategoryCreate(name="Housing", color="#8b5cf6", type=EntryType.EXPENSE),
    CategoryCreate(name="Transport", color="#ec4899", type=EntryType.EXPENSE),
    CategoryCreate(name="Entertainment", color="#f59e0b", type=EntryType.EXPENSE),
    CategoryCreate(name="Other", color="#10b981", type=EntryType.EXPENSE),
    CategoryCreate(name="Income", color="#10b981", type=EntryType.INCOME),
]


class _Table(Generic[T]):
    """Insertion-ordered id -> record map with its own id counter. Not locked."""

    def __init__(self) -> None:
        self._rows: Dict[int, T] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def insert(self, build: Callable[[int], T]) -> T:
        record = build(self._next_id)
        self._rows[self._next_id] = record
        self._next_id += 1
        return record

    def get(self, record_id: int) -> Optional[T]:
        return self._rows.get(record_id)

    def values(self) -> List[T]:
        return list(self._rows.values())

    def patch(self, record_id: int, fields: dict) -> Optional[T]:
        existing = self._rows.get(record_id)
        if existing is None:
            return None
        updated = existing.model_copy(update=fields)
        self._rows[record_id] = updated
        return updated

    def remove(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None


class MemoryStore:
    """
    In-process store for users, categories and transactions.

    One instance is created per application (see app.main) and handed to
    endpoints through app.deps. Every operation runs under a single lock so
    id assignment stays collision-free and readers never see half-applied
    writes. Missing ids come back as None (or False from deletes).
    """

    def __init__(self, seed_categories: bool = True) -> None:
        self._lock = threading.RLock()
        self._users: _Table[User] = _Table()
        self._categories: _Table[Category] = _Table()
        self._transactions: _Table[Transaction] = _Table()

        if seed_categories:
            for category in DEFAULT_CATEGORIES:
                self.create_category(category)

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, data: UserCreate) -> User:
        with self._lock:
            user = self._users.insert(lambda new_id: User(id=new_id, **data.model_dump()))
        logger.debug(f"Created user {user.id}")
        return user

    # Categories

    def get_all_categories(self) -> List[Category]:
        with self._lock:
            return self._categories.values()

    def get_category(self, category_id: int) -> Optional[Category]:
        with self._lock:
            return self._categories.get(category_id)

    def create_category(self, data: CategoryCreate) -> Category:
        with self._lock:
            category = self._categories.insert(lambda new_id: Category(id=new_id, **data.model_dump()))
        logger.debug(f"Created category {category.id} ({category.name})")
        return category

    def update_category(self, category_id: int, fields: dict) -> Optional[Category]:
        with self._lock:
            updated = self._categories.patch(category_id, fields)
        if updated:
            logger.debug(f"Updated category {category_id}: {sorted(fields)}")
        return updated

    def delete_category(self, category_id: int) -> bool:
        # Transactions keep their category_id; reads just stop resolving it.
        with self._lock:
            deleted = self._categories.remove(category_id)
        if deleted:
            logger.debug(f"Deleted category {category_id}")
        return deleted

    # Transactions

    def _with_category(self, transaction: Transaction) -> TransactionWithCategory:
        category = None
        if transaction.category_id is not None:
            category = self._categories.get(transaction.category_id)
        return TransactionWithCategory(**transaction.model_dump(), category=category)

    def get_all_transactions(self) -> List[TransactionWithCategory]:
        with self._lock:
            return [self._with_category(t) for t in self._transactions.values()]

    def get_transaction(self, transaction_id: int) -> Optional[TransactionWithCategory]:
        with self._lock:
            transaction = self._transactions.get(transaction_id)
            if transaction is None:
                return None
            return self._with_category(transaction)

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        with self._lock:
            transaction = self._transactions.insert(
                lambda new_id: Transaction(id=new_id, **data.model_dump())
            )
        logger.debug(f"Created transaction {transaction.id}")
        return transaction

    def update_transaction(self, transaction_id: int, fields: dict) -> Optional[Transaction]:
        """Shallow merge: only the given fields change, the rest keep their values."""
        with self._lock:
            updated = self._transactions.patch(transaction_id, fields)
        if updated:
            logger.debug(f"Updated transaction {transaction_id}: {sorted(fields)}")
        return updated

    def delete_transaction(self, transaction_id: int) -> bool:
        with self._lock:
            deleted = self._transactions.remove(transaction_id)
        if deleted:
            logger.debug(f"Deleted transaction {transaction_id}")
        return deleted

    # Analytics

    def snapshot(self) -> Tuple[List[Category], List[Transaction]]:
        """Consistent view of categories and raw transactions."""
        with self._lock:
            return self._categories.values(), self._transactions.values()

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {
                "users": len(self._users),
                "categories": len(self._categories),
                "transactions": len(self._transactions),
            }
