from django.conf import settings


def shop_details(request):
    """Shop header details used by the base template and receipts."""
    return {
        'shop_name': settings.SWARNA_SHOP_NAME,
        'shop_address': settings.SWARNA_SHOP_ADDRESS,
        'shop_gstin': settings.SWARNA_SHOP_GSTIN,
    }
