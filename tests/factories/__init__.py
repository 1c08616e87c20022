"""Factory Boy setup for test data generation."""

from __future__ import annotations

import factory
from faker import Faker

faker = Faker()
Faker.seed(1234)


class RowFactory(factory.DictFactory):
    """Base factory for plain ``dict`` payload rows."""

    class Meta:
        abstract = True
