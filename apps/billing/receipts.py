from apps.core.pdf import Receipt, money


def generate_invoice_pdf(bill):
    """
    Render a sales invoice.

    Returns:
        BytesIO buffer containing the PDF
    """
    title = "TAX INVOICE" if bill.sale_type == 'gst' else "ESTIMATE"
    if bill.is_cancelled:
        title = f"{title} (CANCELLED)"
    receipt = Receipt(title)

    customer = bill.customer
    receipt.key_values([
        ("Bill No", bill.bill_no),
        ("Date", bill.bill_date.strftime("%d-%m-%Y")),
        ("Customer", customer.name if customer else "Walk-in"),
        ("Phone", customer.phone if customer else ''),
        ("Staff", bill.staff.username if bill.staff else ''),
        ("Sale Type", bill.get_sale_type_display()),
    ])

    rows = []
    for index, item in enumerate(bill.items.all(), start=1):
        rows.append([
            index,
            item.item_name,
            item.barcode or '-',
            f"{item.weight:.3f}",
            f"{item.rate:,.2f}",
            f"{item.making_charges:,.2f}",
            f"{item.line_total:,.2f}",
        ])
    receipt.table(
        ["#", "Item", "Barcode", "Wt (g)", "Rate", "Making", "Amount"],
        rows,
        [0.05, 0.33, 0.14, 0.1, 0.13, 0.12, 0.13],
        align_right=(3, 4, 5, 6),
    )

    exchange = getattr(bill, 'old_gold_exchange', None)
    if exchange is not None:
        receipt.paragraph("Old Gold Exchange", font="Helvetica-Bold")
        receipt.key_values([
            ("Weight", f"{exchange.weight:.3f} g"),
            ("Purity", exchange.purity),
            ("Rate", money(exchange.rate_per_gram)),
            ("Value", money(exchange.total_value)),
            ("Particulars", exchange.particulars),
            ("HSN Code", exchange.hsn_code),
        ])

    totals = [("Subtotal", money(bill.subtotal))]
    if exchange is not None:
        totals.append(("Less Old Gold", money(exchange.total_value)))
    if bill.sale_type == 'gst':
        totals.append(("CGST 1.5%", money(bill.cgst)))
        totals.append(("SGST 1.5%", money(bill.sgst)))
    if bill.discount:
        totals.append(("Discount", money(bill.discount)))
    totals.append(("Amount Payable", money(bill.amount_payable)))
    receipt.totals(totals)

    if bill.payment_method:
        receipt.table(
            ["Payment", "Reference", "Amount"],
            [[p.get('type', '').replace('_', ' ').title(), p.get('reference') or '-', p.get('amount')]
             for p in bill.payment_method],
            [0.4, 0.4, 0.2],
            align_right=(2,),
        )

    if bill.remarks:
        receipt.paragraph(bill.remarks)
    receipt.signature()
    return receipt.render()
