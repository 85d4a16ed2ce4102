"""
Shared drawing helpers for printed receipts.

Every receipt is an A4 page drawn with a reportlab canvas: shop header,
a title, key/value blocks and simple tables. Tables continue on a new page
when they run past the bottom margin.
"""

from io import BytesIO

from django.conf import settings
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

MARGIN = 40
LINE_HEIGHT = 16
BRAND_COLOR = colors.HexColor('#8a6d1d')


class Receipt:
    """Thin cursor over a canvas that tracks the current y position."""

    def __init__(self, title):
        self.buffer = BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=A4)
        self.width, self.height = A4
        self.title = title
        self.y = self.height - MARGIN
        self.draw_header()

    def draw_header(self):
        c = self.canvas
        c.setFont("Helvetica-Bold", 18)
        c.setFillColor(BRAND_COLOR)
        c.drawCentredString(self.width / 2, self.y - 10, settings.SWARNA_SHOP_NAME)

        c.setFont("Helvetica", 9)
        c.setFillColor(colors.black)
        self.y -= 26
        if settings.SWARNA_SHOP_ADDRESS:
            c.drawCentredString(self.width / 2, self.y, settings.SWARNA_SHOP_ADDRESS)
            self.y -= 12
        details = []
        if settings.SWARNA_SHOP_PHONE:
            details.append(f"Phone: {settings.SWARNA_SHOP_PHONE}")
        if settings.SWARNA_SHOP_GSTIN:
            details.append(f"GSTIN: {settings.SWARNA_SHOP_GSTIN}")
        if details:
            c.drawCentredString(self.width / 2, self.y, "   ".join(details))
            self.y -= 12

        c.setStrokeColor(BRAND_COLOR)
        c.setLineWidth(1.5)
        c.line(MARGIN, self.y, self.width - MARGIN, self.y)
        self.y -= 22

        c.setFont("Helvetica-Bold", 14)
        c.drawCentredString(self.width / 2, self.y, self.title)
        self.y -= 24

    def ensure_space(self, needed=LINE_HEIGHT):
        if self.y - needed < MARGIN:
            self.canvas.showPage()
            self.y = self.height - MARGIN

    def key_values(self, pairs, columns=2):
        """Label/value pairs laid out ``columns`` per row."""
        c = self.canvas
        column_width = (self.width - 2 * MARGIN) / columns
        for start in range(0, len(pairs), columns):
            self.ensure_space()
            for offset, (label, value) in enumerate(pairs[start:start + columns]):
                x = MARGIN + offset * column_width
                c.setFont("Helvetica-Bold", 9)
                c.drawString(x, self.y, f"{label}:")
                c.setFont("Helvetica", 9)
                c.drawString(x + 85, self.y, str(value if value not in (None, '') else '-'))
            self.y -= LINE_HEIGHT
        self.y -= 6

    def table(self, headers, rows, widths, align_right=()):
        """
        Draw a simple table. ``widths`` are fractions of the printable width;
        column indexes in ``align_right`` are right aligned.
        """
        c = self.canvas
        printable = self.width - 2 * MARGIN
        xs = [MARGIN]
        for fraction in widths[:-1]:
            xs.append(xs[-1] + fraction * printable)
        ends = [x + fraction * printable for x, fraction in zip(xs, widths)]

        def draw_row(values, font):
            c.setFont(font, 9)
            for index, value in enumerate(values):
                text = str(value)
                if index in align_right:
                    c.drawRightString(ends[index] - 4, self.y, text)
                else:
                    c.drawString(xs[index] + 2, self.y, text)
            self.y -= LINE_HEIGHT

        self.ensure_space(2 * LINE_HEIGHT)
        c.setFillColor(colors.HexColor('#f3ead3'))
        c.rect(MARGIN, self.y - 4, printable, LINE_HEIGHT, stroke=0, fill=1)
        c.setFillColor(colors.black)
        draw_row(headers, "Helvetica-Bold")
        for row in rows:
            self.ensure_space()
            draw_row(row, "Helvetica")
        self.y -= 6

    def totals(self, pairs):
        """Right-aligned totals block; the last pair is printed bold."""
        c = self.canvas
        for index, (label, value) in enumerate(pairs):
            self.ensure_space()
            font = "Helvetica-Bold" if index == len(pairs) - 1 else "Helvetica"
            c.setFont(font, 10)
            c.drawRightString(self.width - MARGIN - 110, self.y, label)
            c.drawRightString(self.width - MARGIN, self.y, str(value))
            self.y -= LINE_HEIGHT
        self.y -= 6

    def paragraph(self, text, font="Helvetica", size=9):
        c = self.canvas
        c.setFont(font, size)
        for line in (text or '').splitlines():
            self.ensure_space()
            c.drawString(MARGIN, self.y, line)
            self.y -= LINE_HEIGHT - 4
        self.y -= 6

    def signature(self, label="Authorised Signatory"):
        self.ensure_space(4 * LINE_HEIGHT)
        self.y -= 3 * LINE_HEIGHT
        c = self.canvas
        c.setFont("Helvetica", 9)
        c.drawRightString(self.width - MARGIN, self.y, label)
        c.drawString(MARGIN, self.y, "Customer Signature")

    def render(self):
        self.canvas.showPage()
        self.canvas.save()
        self.buffer.seek(0)
        return self.buffer


def money(value):
    """Plain 2-decimal amount for receipts (reportlab's base fonts lack the rupee sign)."""
    return f"Rs. {value:,.2f}" if value is not None else '-'
