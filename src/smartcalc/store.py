'''
Bounded, deduplicated, most-recent-first string lists backed by a gateway.
'''

import asyncio
import logging

from .util import PersistenceError


logger = logging.getLogger(__name__)


class BoundedRecordStore:
    '''
    Ordered string list capped at ``capacity`` with no two equal keys.

    New items go to the front, eviction happens at the tail. Every mutation
    takes effect in memory before anything is awaited; the write of the
    resulting list follows and is best effort: a failed write is logged and
    the in-memory list stays authoritative until the next write succeeds.

    Subclasses set KEY, the gateway key the list is persisted under, and may
    override key() to change what counts as a duplicate.
    '''

    KEY = None
    CAPACITY = 100

    def __init__(self, gateway, capacity=None):
        self.gateway = gateway
        self.capacity = type(self).CAPACITY if capacity is None else capacity
        self._items = []
        # Writes for our key must land in mutation order.
        self._write_lock = asyncio.Lock()

    @property
    def items(self):
        return tuple(self._items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self._items[index]

    def __contains__(self, item):
        return self.key(item) in self._items

    def key(self, item):
        '''
        Canonical form of item used for storage and deduplication.
        '''
        return item

    async def load(self):
        '''
        Replace items with what the gateway has, or nothing.

        Persisted entries go through key(); blank keys, duplicate keys and
        entries beyond capacity are dropped.
        '''
        try:
            values = await self.gateway.load(type(self).KEY)
        except PersistenceError as e:
            logger.warning('Could not load %s, starting empty: %s',
                           type(self).KEY, e.args[0])
            values = []
        items = []
        for value in values:
            key = self.key(value)
            if key and key.strip() and key not in items:
                items.append(key)
        self._items = items[:self.capacity]
        logger.debug('Loaded %d %s entries', len(self._items), type(self).KEY)

    async def add(self, item):
        '''
        Insert item at the front unless its key is blank or already present.

        Returns True if the store changed.
        '''
        key = self.key(item)
        if not key or not key.strip() or key in self._items:
            return False
        self._items.insert(0, key)
        del self._items[self.capacity:]
        await self._persist()
        return True

    async def remove_at(self, index):
        '''
        Remove and return the item at index, or None if out of range.
        '''
        if not 0 <= index < len(self._items):
            return None
        item = self._items.pop(index)
        await self._persist()
        return item

    async def clear(self):
        self._items.clear()
        await self._persist()

    async def _persist(self):
        snapshot = list(self._items)
        async with self._write_lock:
            try:
                await self.gateway.save(type(self).KEY, snapshot)
            except PersistenceError as e:
                logger.warning('Could not save %s: %s',
                               type(self).KEY, e.args[0])


class HistoryStore(BoundedRecordStore):
    '''
    Successful evaluations, as "<expression> = <result>" records.
    '''

    KEY = 'history'
    SEPARATOR = ' = '

    def key(self, item):
        if isinstance(item, tuple):
            return self.record(*item)
        return item

    @classmethod
    def record(cls, expression, result):
        return expression + cls.SEPARATOR + result

    async def add(self, expression, result):
        return await super().add((expression, result))

    def expression_at(self, index):
        '''
        Return the expression half of the record at index.
        '''
        record = self._items[index]
        expression, _, _ = record.rpartition(type(self).SEPARATOR)
        return (expression or record).strip()


class SavedFormulaStore(BoundedRecordStore):
    '''
    Raw expressions saved by the user, whitespace-trimmed.
    '''

    KEY = 'saved_formulas'

    def key(self, item):
        return item.strip()
