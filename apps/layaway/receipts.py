from django.utils import timezone

from apps.core.pdf import Receipt, money


def generate_layaway_statement_pdf(summary, transactions):
    """
    Render the payment statement for one layaway bill.

    Returns:
        BytesIO buffer containing the PDF
    """
    receipt = Receipt("LAYAWAY PAYMENT STATEMENT")
    bill = summary.bill
    customer = bill.customer

    receipt.key_values([
        ("Bill No", bill.bill_no),
        ("Bill Date", bill.bill_date.strftime("%d-%m-%Y")),
        ("Customer", customer.name if customer else "Walk-in"),
        ("Phone", customer.phone if customer else ''),
        ("Statement Date", timezone.localdate().strftime("%d-%m-%Y")),
        ("Payments", summary.transaction_count),
    ])

    receipt.table(
        ["Date", "Method", "Reference", "Amount"],
        [
            [t.payment_date.strftime("%d-%m-%Y"), t.get_payment_method_display(),
             t.reference_number or '-', f"{t.amount:,.2f}"]
            for t in sorted(transactions, key=lambda t: (t.payment_date, t.pk))
        ],
        [0.2, 0.25, 0.35, 0.2],
        align_right=(3,),
    )

    receipt.totals([
        ("Bill Total", money(summary.total_amount)),
        ("Total Paid", money(summary.total_paid)),
        ("Balance Due", money(summary.remaining)),
    ])
    receipt.signature()
    return receipt.render()
