from apps.core.pdf import Receipt, money


def generate_advance_receipt_pdf(booking):
    """
    Render the receipt handed over when an advance is taken.

    Returns:
        BytesIO buffer containing the PDF
    """
    receipt = Receipt("ADVANCE BOOKING RECEIPT")
    bill = booking.bill
    customer = bill.customer

    receipt.key_values([
        ("Receipt No", f"ADV-{booking.pk:05d}"),
        ("Bill No", bill.bill_no),
        ("Booking Date", booking.booking_date.strftime("%d-%m-%Y")),
        ("Delivery Date", booking.delivery_date.strftime("%d-%m-%Y") if booking.delivery_date else ''),
        ("Customer", customer.name if customer else "Walk-in"),
        ("Phone", customer.phone if customer else ''),
        ("Status", booking.get_booking_status_display()),
    ])

    if booking.item_description:
        receipt.paragraph("Items Booked", font="Helvetica-Bold")
        receipt.paragraph(booking.item_description)

    receipt.totals([
        ("Total Amount", money(booking.total_amount)),
        ("Advance Paid", money(booking.advance_amount)),
        ("Balance Due", money(booking.remaining_amount)),
    ])

    if booking.customer_notes:
        receipt.paragraph("Notes", font="Helvetica-Bold")
        receipt.paragraph(booking.customer_notes)

    receipt.paragraph(
        "The advance is adjusted against the final bill on delivery.\n"
        "Please bring this receipt when collecting your order."
    )
    receipt.signature()
    return receipt.render()
