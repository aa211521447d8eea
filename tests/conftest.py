"""
Shared fixtures: a small company object graph mixing records, maps,
lists, tuples and arrays.
"""
import array
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pytest


@dataclass
class Address:
    street: str = ''
    zip_code: int = 0


@dataclass
class Person:
    first_name: str = ''
    last_name: str = ''
    age: int = 0
    address: Optional[Address] = None
    nicknames: tuple = ()
    tags: List[str] = field(default_factory=list)


class Department:
    """Plain class without type hints."""

    def __init__(self, name, manager=None, employees=None):
        self.name = name
        self.manager = manager
        self.employees = employees if employees is not None else []

    def headcount(self):
        return len(self.employees)


class DevOps:
    __slots__ = ('on_call', 'scores')

    def __init__(self, on_call, scores):
        self.on_call = on_call
        self.scores = scores


@dataclass
class Company:
    name: str = ''
    departments: Dict[str, Department] = field(default_factory=dict)
    ratings: Optional[np.ndarray] = None


@pytest.fixture
def company():
    """Build a company whose departments hold people in various containers."""
    ann = Person('Ann', 'Smith', 42, Address('Main St', 1234), ('annie',), ['python', 'sql'])
    bob = Person('Bob', 'Jones', 37, None, ('bobby', 'b'))
    eng = Department('engineering', manager=ann, employees=[ann, bob])
    ops = Department('operations', employees=(bob,))
    ops.devops = DevOps(on_call=bob, scores=array.array('i', [7, 8, 9]))
    return Company(
        name='Acme',
        departments={'engineering': eng, 'operations': ops},
        ratings=np.array([4.5, 3.0, 5.0]),
    )
