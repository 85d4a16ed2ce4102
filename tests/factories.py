"""
Shared fixtures for the test suite.
"""
from datetime import date
from decimal import Decimal

from apps.billing.calculator import BillDraft, make_line_item
from apps.billing.services import BillHeader, persist_bill
from apps.core.context import SessionContext
from apps.core.models import User
from apps.customers.models import Customer
from apps.inventory.models import Item

PASSWORD = 'testpass123'


def make_user(username, role=User.ROLE_STAFF, **flags):
    return User.objects.create_user(username=username, password=PASSWORD, role=role, **flags)


def make_admin(username='owner'):
    return make_user(username, role=User.ROLE_ADMIN, can_edit_bills=True, can_edit_stock=True,
                     can_authorize_nongst=True)


def context_for(user):
    return SessionContext.from_user(user, ip_address='127.0.0.1', user_agent='tests')


def make_item(barcode='GC001', name='Gold Chain', weight='10', price='1000', making='0'):
    return Item.objects.create(
        barcode=barcode,
        item_name=name,
        weight=Decimal(weight),
        price_per_gram=Decimal(price),
        making_charges=Decimal(making),
    )


def make_customer(name='Lakshmi Narayanan', phone='9845012345'):
    return Customer.objects.create(name=name, phone=phone)


def draft_for(*items, sale_type='gst'):
    lines = [
        make_line_item(item.item_name, item.weight, item.price_per_gram, item.making_charges,
                       barcode=item.barcode, item_id=item.pk)
        for item in items
    ]
    return BillDraft(sale_type=sale_type).with_items(lines)


def save_bill(context, draft, bill_date=date(2025, 1, 15), **header):
    return persist_bill(context, BillHeader(bill_date=bill_date, **header), draft)
