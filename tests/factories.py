"""
Value factories for the entity builders.

Each factory produces a ``{FieldKey: value}`` mapping with realistic fake
data, ready to pass to ``RecordBuilder.with_values``.

Usage:
    account = AccountBuilder().with_values(AccountValuesFactory())
    contact = ContactBuilder().with_values(ContactValuesFactory(email="x@y.test"))
"""

import factory

from tests.builders.account import EMPLOYEES, INDUSTRY, NAME
from tests.builders.contact import EMAIL, LAST_NAME
from tests.builders.opportunity import AMOUNT, STAGE


def keyed_by(*keys):
    """Return a model callable mapping keyword names onto FieldKeys."""
    by_name = {key.name: key for key in keys}

    def build(**values):
        return {by_name[name]: value for name, value in values.items()}

    return build


class AccountValuesFactory(factory.Factory):
    class Meta:
        model = keyed_by(NAME, INDUSTRY, EMPLOYEES)

    name = factory.Faker("company")
    industry = factory.Iterator(["Retail", "Banking", "Energy", "Media"])
    employees = factory.Faker("random_int", min=1, max=5000)


class ContactValuesFactory(factory.Factory):
    class Meta:
        model = keyed_by(LAST_NAME, EMAIL)

    last_name = factory.Faker("last_name")
    email = factory.Sequence(lambda n: f"contact{n}@example.test")


class OpportunityValuesFactory(factory.Factory):
    class Meta:
        model = keyed_by(AMOUNT, STAGE)

    amount = factory.Faker("random_int", min=100, max=100000)
    stage = factory.Iterator(["Prospecting", "Negotiation", "Closed Won"])
