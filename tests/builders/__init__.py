"""
Test Data Builders - Fluent entity builders on top of RecordBuilder.

Each builder fixes its entity kind, exposes chainable ``with_*`` setters and
injects defaults through lifecycle hooks.

Usage:
    from tests.builders import AccountBuilder, ContactBuilder, OpportunityBuilder

    account = AccountBuilder().with_name("Acme")
    contact = ContactBuilder().for_account(account)
    deal = OpportunityBuilder().for_account(account).with_contact(contact)

    deal.persist(InMemoryUnitOfWork())
"""

from .account import AccountBuilder
from .contact import ContactBuilder
from .opportunity import OpportunityBuilder

__all__ = ["AccountBuilder", "ContactBuilder", "OpportunityBuilder"]
