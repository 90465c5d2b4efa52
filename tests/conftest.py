import asyncio

from pytest import fixture

from smartcalc.gateway import MemoryGateway
from smartcalc.session import Calculator


@fixture
def gateway():
    return MemoryGateway()


@fixture
def calculator(gateway):
    '''
    Calculator over an empty in-memory gateway, stores already loaded.
    '''
    return asyncio.run(Calculator.open(gateway))
