"""Transaction model, normalization, sources, and the in-memory store."""
from .schemas import InvalidConfig, MalformedRecord, Polarity, SpendSightError, Transaction
from .normalize import normalize_transactions
from .sources import FileSource, StaticSource, TransactionSource
from .store import TransactionStore
