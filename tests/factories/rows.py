"""Factories for tabular payload rows."""

from __future__ import annotations

import factory

from . import RowFactory, faker


class MemberRowFactory(RowFactory):
    """Flat row as returned by a listing endpoint."""

    id = factory.Sequence(lambda n: n + 1)
    name = factory.LazyAttribute(lambda _: faker.name())
    email = factory.LazyAttribute(lambda _: faker.unique.email())
    active = True


class OrderRowFactory(RowFactory):
    """Row with optional and numeric columns."""

    reference = factory.LazyAttribute(lambda _: faker.bothify("ORD-####"))
    quantity = factory.LazyAttribute(lambda _: faker.random_int(min=1, max=9))
    note = None
