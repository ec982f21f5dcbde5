"""
Order Mirror

Keeps a JSON copy of the whole order collection on disk so a restart sees the
same orders. The file is rewritten on every store broadcast; it is a stub for
a real persistence backend, not a database.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .models import Order
from .protocols import OrderServiceError, OrderStoreProtocol

logger = logging.getLogger(__name__)

_ORDERS_ADAPTER = TypeAdapter(List[Order])


class JsonOrderMirror:
    """Full-snapshot JSON file mirror of an OrderStore"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[List[Order]]:
        """
        Read the saved collection.

        Returns:
            Orders in saved order, or None when nothing was saved yet

        Raises:
            OrderServiceError: the file exists but cannot be parsed
        """
        if not self.path.exists():
            return None
        try:
            orders = _ORDERS_ADAPTER.validate_json(self.path.read_bytes())
        except ValidationError as e:
            raise OrderServiceError(f"Corrupt order file {self.path}: {e}") from e
        logger.info(f"Loaded {len(orders)} orders from {self.path}")
        return orders

    def save(self, orders: Iterable[Order]) -> None:
        """Write the full collection, replacing the previous file"""
        orders = list(orders)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_bytes(_ORDERS_ADAPTER.dump_json(orders, indent=2))
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved {len(orders)} orders to {self.path}")

    def attach(self, store: OrderStoreProtocol) -> Callable[[], None]:
        """Save on every store write; returns the unsubscribe callable"""
        return store.subscribe(self.save)
