from apps.core.pdf import Receipt, money


def generate_purchase_slip_pdf(purchase):
    """
    Render the pink slip given to a customer selling old gold.

    Returns:
        BytesIO buffer containing the PDF
    """
    receipt = Receipt("PURCHASE SLIP (OLD GOLD)")
    customer = purchase.customer

    receipt.key_values([
        ("Purchase No", purchase.purchase_no),
        ("Date", purchase.purchase_date.strftime("%d-%m-%Y")),
        ("Mr./Mrs.", customer.name if customer else "Walk-in"),
        ("Phone", customer.phone if customer else ''),
        ("Against Bill", purchase.sale_bill.bill_no if purchase.sale_bill else ''),
        ("Staff", (purchase.staff.get_full_name() or purchase.staff.username) if purchase.staff else ''),
    ])

    if purchase.particulars:
        receipt.paragraph(f"Particulars: {purchase.particulars}")

    rows = [
        (item.hsn_code, item.code, f"{item.weight:.3f}", item.purity, money(item.rate), money(item.amount))
        for item in purchase.items.all()
    ]
    receipt.table(
        ["HSN", "Code", "Weight (g)", "Purity", "Rate / g", "Amount"],
        rows,
        widths=[0.12, 0.16, 0.14, 0.12, 0.22, 0.24],
        align_right=(2, 4, 5),
    )

    receipt.totals([
        ("Subtotal", money(purchase.subtotal)),
        ("CGST", money(purchase.cgst)),
        ("SGST", money(purchase.sgst)),
        ("Grand Total", money(purchase.grand_total)),
    ])

    payment = purchase.get_payment_mode_display()
    if purchase.payment_reference:
        payment = f"{payment} ({purchase.payment_reference})"
    receipt.paragraph(f"Paid by: {payment}")
    if purchase.remarks:
        receipt.paragraph(f"Remarks: {purchase.remarks}")

    receipt.signature()
    return receipt.render()
