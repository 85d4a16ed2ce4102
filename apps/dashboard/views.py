"""
Views for dashboard module.
Shop home with today's sales, stock and open balances.
"""

from django.contrib.auth.decorators import login_required
from django.db.models import Count, Sum
from django.shortcuts import render
from django.utils import timezone

from apps.advance_booking.models import AdvanceBooking
from apps.billing.models import Bill
from apps.billing.views import visible_bills
from apps.inventory.models import GoldRate, Item
from apps.layaway.summaries import summarize_bills
from apps.layaway.views import visible_transactions


@login_required
def portal_home(request):
    session_context = request.session_context
    today = timezone.localdate()

    finalized = visible_bills(session_context).filter(bill_status=Bill.STATUS_FINALIZED)
    today_sales = finalized.filter(bill_date=today).aggregate(count=Count('id'), amount=Sum('amount_payable'))
    month_sales = finalized.filter(
        bill_date__year=today.year, bill_date__month=today.month
    ).aggregate(count=Count('id'), amount=Sum('amount_payable'))

    active_bookings = AdvanceBooking.objects.filter(
        bill__in=visible_bills(session_context), booking_status=AdvanceBooking.STATUS_ACTIVE
    )
    layaway_open = [s for s in summarize_bills(visible_transactions(session_context)) if not s.is_settled]

    context = {
        'today': today,
        'today_sales_count': today_sales['count'] or 0,
        'today_sales_amount': today_sales['amount'] or 0,
        'month_sales_count': month_sales['count'] or 0,
        'month_sales_amount': month_sales['amount'] or 0,
        'in_stock_count': Item.objects.filter(stock_status=Item.STATUS_IN_STOCK).count(),
        'gold_rate': GoldRate.objects.current(),
        'active_bookings_count': active_bookings.count(),
        'active_bookings_amount': active_bookings.aggregate(total=Sum('advance_amount'))['total'] or 0,
        'layaway_open_count': len(layaway_open),
        'layaway_open_balance': sum(s.remaining for s in layaway_open),
        'recent_bills': finalized.order_by('-created_at')[:5],
    }
    return render(request, 'dashboard/home.html', context)
