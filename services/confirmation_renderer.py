"""
Confirmation document rendering.
Turns a validated booking and its per-person menu selections into the
confirmation document sent to the customer and the venue: a structured
document, its HTML and plain-text renderings and, for attachment delivery,
an A4 PDF.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException
from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.settings import ConfirmationDelivery
from domain.errors import RenderError
from domain.models import BookingRequest, MenuSelection


logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

# TrueType so names and requests outside Latin-1 still render; glyphs the
# face lacks are left blank by fpdf2 rather than failing the document
PDF_FONT = "Lato"
PDF_FONT_FILE = Path(__file__).resolve().parent / "fonts" / "Lato-Regular.ttf"

TEMPLATES = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(),
)

DOCUMENT_TITLE = "Group Booking Confirmation"
CURRENCY_SYMBOL = "£"
BRAND_RGB = (0x75, 0x2F, 0x15)


def format_price(price: Union[int, Decimal]) -> str:
    """Amount exactly as submitted: ``25`` -> ``25``, ``12.50`` -> ``12.50``."""
    if isinstance(price, Decimal):
        return format(price, "f")
    return str(price)


@dataclass(frozen=True)
class CourseLine:
    course: str
    item: str
    price: str

    @property
    def text(self) -> str:
        return f"{self.course}: {self.item} - {CURRENCY_SYMBOL}{self.price}"


@dataclass(frozen=True)
class PersonBlock:
    number: int
    name: str
    lines: Tuple[CourseLine, ...]

    @property
    def heading(self) -> str:
        return f"Person {self.number}: {self.name}"


@dataclass
class ConfirmationDocument:
    """Rendered confirmation; built per booking and discarded after dispatch."""

    venue_name: str
    booking_date: str
    booking_time: str
    party_size: int
    details: List[Tuple[str, str]]
    people: List[PersonBlock]
    title: str = DOCUMENT_TITLE
    html: str = ""
    text: str = ""
    summary_html: Optional[str] = None
    pdf: Optional[bytes] = field(default=None, repr=False)

    @property
    def has_attachment(self) -> bool:
        return self.pdf is not None

    @property
    def attachment_filename(self) -> str:
        return f"booking-confirmation-{self.booking_date}.pdf"


class ConfirmationRenderer:
    """Builds confirmation documents for one venue and one delivery strategy."""

    def __init__(
        self,
        venue_name: str,
        delivery: ConfirmationDelivery = ConfirmationDelivery.INLINE,
        environment: Optional[Environment] = None,
    ):
        self.venue_name = venue_name
        self.delivery = delivery
        self.env = environment or TEMPLATES

    def render(
        self,
        request: BookingRequest,
        selections: Sequence[MenuSelection],
        contact_email: Optional[str] = None,
    ) -> ConfirmationDocument:
        """
        Render the confirmation for a validated booking.

        People and their courses keep the order they were submitted in.
        ``contact_email`` is the address the confirmation goes to; when it is
        not given the booking's own contact email is shown.

        Raises:
            RenderError: a course selection is missing its course, item or
                price, or the PDF could not be produced
        """
        document = ConfirmationDocument(
            venue_name=self.venue_name,
            booking_date=request.date,
            booking_time=request.time,
            party_size=request.party_size,
            details=self._details(request, contact_email or request.contact_email),
            people=self._people(selections),
        )

        document.html = self.env.get_template("confirmation.html").render(doc=document, intro=True)
        document.text = self._text(document)

        if self.delivery == ConfirmationDelivery.ATTACHMENT:
            document.summary_html = self.env.get_template("attachment_notice.html").render(doc=document)
            document.pdf = self._pdf(document)

        return document

    @staticmethod
    def _details(request: BookingRequest, contact_email: Optional[str]) -> List[Tuple[str, str]]:
        return [
            ("Date", request.date),
            ("Time", request.time),
            ("Party Size", str(request.party_size)),
            ("Contact Name", request.contact_name),
            ("Contact Email", contact_email or ""),
            ("Special Requests", request.special_requests or "None"),
        ]

    @staticmethod
    def _people(selections: Sequence[MenuSelection]) -> List[PersonBlock]:
        people = []
        for number, person in enumerate(selections, start=1):
            lines = []
            for position, selection in enumerate(person.selections, start=1):
                missing = [
                    name for name in ("course", "item", "price")
                    if getattr(selection, name) in (None, "")
                ]
                if missing:
                    raise RenderError(
                        f"Person {number} ({person.name}) selection {position} "
                        f"is missing {', '.join(missing)}"
                    )
                lines.append(CourseLine(
                    course=selection.course,
                    item=selection.item,
                    price=format_price(selection.price),
                ))
            people.append(PersonBlock(number=number, name=person.name, lines=tuple(lines)))
        return people

    @staticmethod
    def _text(document: ConfirmationDocument) -> str:
        out = [
            document.venue_name,
            document.title,
            "",
            "Booking Details",
        ]
        out.extend(f"{label}: {value}" for label, value in document.details)
        out.extend(["", "Menu Selections"])
        for person in document.people:
            out.append(person.heading)
            out.extend(f"  {line.text}" for line in person.lines)
        return "\n".join(out) + "\n"

    @staticmethod
    def _pdf(document: ConfirmationDocument) -> bytes:
        """A4 rendering of the same content as the HTML layout."""
        try:
            pdf = FPDF(format="A4")
            pdf.set_margins(20, 20, 20)
            pdf.set_title(f"{document.title} - {document.venue_name}")
            pdf.add_font(PDF_FONT, "", str(PDF_FONT_FILE))
            pdf.add_page()

            pdf.set_text_color(*BRAND_RGB)
            pdf.set_font(PDF_FONT, size=22)
            pdf.cell(0, 12, document.venue_name, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_font(PDF_FONT, size=15)
            pdf.cell(0, 10, document.title, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_draw_color(*BRAND_RGB)
            pdf.set_line_width(0.6)
            pdf.line(pdf.l_margin, pdf.get_y() + 2, pdf.w - pdf.r_margin, pdf.get_y() + 2)
            pdf.ln(8)

            pdf.set_font(PDF_FONT, size=13)
            pdf.cell(0, 9, "Booking Details", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.set_font(PDF_FONT, size=11)
            for label, value in document.details:
                pdf.set_text_color(*BRAND_RGB)
                pdf.cell(pdf.get_string_width(f"{label}: ") + 1, 7, f"{label}:")
                pdf.set_text_color(0, 0, 0)
                pdf.multi_cell(0, 7, value, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.ln(4)

            pdf.set_text_color(*BRAND_RGB)
            pdf.set_font(PDF_FONT, size=13)
            pdf.cell(0, 9, "Menu Selections", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            for person in document.people:
                pdf.set_text_color(0, 0, 0)
                pdf.set_font(PDF_FONT, size=12)
                pdf.cell(0, 8, person.heading, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
                pdf.set_font(PDF_FONT, size=11)
                for line in person.lines:
                    pdf.set_text_color(*BRAND_RGB)
                    pdf.cell(0, 6, f"{line.course}:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
                    pdf.set_text_color(0, 0, 0)
                    pdf.multi_cell(
                        0, 6, f"{line.item} - {CURRENCY_SYMBOL}{line.price}",
                        new_x=XPos.LMARGIN, new_y=YPos.NEXT,
                    )
                pdf.ln(3)

            return bytes(pdf.output())
        except FPDFException as e:
            raise RenderError(f"PDF rendering failed: {e}") from e
