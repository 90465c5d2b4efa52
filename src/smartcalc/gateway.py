'''
Persistence gateways: asynchronous key to string-list storage.

A gateway has two coroutines, ``load(key)`` returning a list of strings
(empty when the key was never saved) and ``save(key, values)``. Both raise
PersistenceError on failure.
'''

import asyncio
import json
import os
import tempfile
from pathlib import Path

from .util import PersistenceError, wrap_persistence_errors


class MemoryGateway:
    '''
    Dict backed gateway, for tests and sessions that shouldn't touch disk.

    :param data: Initial mapping of key to list of strings.
    :param fail: Raise PersistenceError from every call when true.
    '''

    def __init__(self, data=None, fail=False):
        self.data = {key: list(values)
                     for key, values
                     in (data or {}).items()}
        self.fail = fail
        self.saves = []

    def _check(self, action, key):
        if self.fail:
            raise PersistenceError('Cannot {} {!r}'.format(action, key))

    async def load(self, key):
        self._check('load', key)
        return list(self.data.get(key, []))

    async def save(self, key, values):
        self._check('save', key)
        self.data[key] = list(values)
        self.saves.append((key, list(values)))


class JSONFileGateway:
    '''
    Stores each key as a JSON array of strings in ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the old one, so readers never see a half-written list. File I/O runs in
    a worker thread.
    '''

    SUFFIX = '.json'

    def __init__(self, directory):
        self.directory = Path(directory).expanduser()

    def path(self, key):
        return self.directory / (key + type(self).SUFFIX)

    @wrap_persistence_errors('Cannot load {1!r}')
    def _read(self, key):
        try:
            with open(self.path(key), encoding='utf-8') as fp:
                values = json.load(fp)
        except FileNotFoundError:
            return []
        if not isinstance(values, list) or \
           not all(isinstance(value, str) for value in values):
            raise ValueError('{} is not a list of strings'.format(
                self.path(key)))
        return values

    @wrap_persistence_errors('Cannot save {1!r}')
    def _write(self, key, values):
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, temporary = tempfile.mkstemp(dir=self.directory,
                                         prefix='.' + key,
                                         suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fp:
                json.dump(list(values), fp, ensure_ascii=False, indent=2)
            os.replace(temporary, self.path(key))
        except BaseException:
            os.unlink(temporary)
            raise

    async def load(self, key):
        return await asyncio.to_thread(self._read, key)

    async def save(self, key, values):
        await asyncio.to_thread(self._write, key, list(values))
