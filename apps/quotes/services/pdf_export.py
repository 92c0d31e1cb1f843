"""
PDF rendering of a quote with fpdf2.

Core fonts only cover latin-1; text goes through ``pdf_text`` first.
"""

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from apps.premium.services import is_premium_user
from apps.profiles.services import get_or_create_profile
from apps.quotes.currency import format_currency
from apps.quotes.models import Devis

# Primary colour per template (R, G, B)
TEMPLATE_COLORS = {
    'classic': (30, 64, 175),
    'modern': (14, 165, 233),
    'minimal': (75, 85, 99),
    'corporate': (27, 75, 140),
    'creatif': (255, 107, 53),
    'artisan': (139, 69, 19),
    'elegant': (138, 109, 59),
    'professionnel': (44, 62, 80),
    'minimaliste': (51, 51, 51),
}
DEFAULT_COLOR = TEMPLATE_COLORS['classic']

WATERMARK_TEXT = 'Généré avec Solvix - version gratuite'


def pdf_text(value) -> str:
    """Make ``value`` printable with the latin-1 core fonts."""
    text = str(value or '').replace('€', 'EUR').replace('\u202f', ' ')
    return text.encode('latin-1', 'replace').decode('latin-1')


def pdf_filename(devis: Devis) -> str:
    return f'Devis-{devis.quote_number}.pdf'


class QuotePDF(FPDF):
    def __init__(self, color, watermark=False):
        super().__init__(orientation='P', unit='mm', format='A4')
        self.primary_color = color
        self.watermark = watermark
        self.set_auto_page_break(auto=True, margin=20)

    def footer(self):
        self.set_y(-15)
        self.set_font('Helvetica', 'I', 8)
        self.set_text_color(150)
        if self.watermark:
            self.cell(0, 5, pdf_text(WATERMARK_TEXT), align='C',
                      new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.cell(0, 5, f'Page {self.page_no()}', align='C')


def _company_block(pdf, profile):
    pdf.set_font('Helvetica', 'B', 11)
    pdf.set_text_color(40)
    pdf.cell(0, 6, pdf_text(profile.company_name or 'Mon entreprise'),
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_font('Helvetica', '', 9)
    pdf.set_text_color(90)
    lines = [
        profile.company_address,
        profile.company_phone,
        profile.company_email,
        f'RCCM: {profile.company_rccm}' if profile.company_rccm else '',
        f'NCC: {profile.company_ncc}' if profile.company_ncc else '',
    ]
    for line in filter(None, lines):
        pdf.multi_cell(90, 4.5, pdf_text(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _title_block(pdf, devis, top):
    pdf.set_xy(120, top)
    pdf.set_font('Helvetica', 'B', 20)
    pdf.set_text_color(*pdf.primary_color)
    pdf.cell(80, 10, 'DEVIS', align='R', new_x=XPos.LEFT, new_y=YPos.NEXT)

    pdf.set_font('Helvetica', '', 9)
    pdf.set_text_color(60)
    for label, value in (
        ('N°', devis.quote_number),
        ('Date', devis.date_creation.strftime('%d/%m/%Y')),
        ('Valable jusqu\'au', devis.date_expiration.strftime('%d/%m/%Y')),
    ):
        pdf.set_x(120)
        pdf.cell(80, 5, pdf_text(f'{label} : {value}'), align='R',
                 new_x=XPos.LEFT, new_y=YPos.NEXT)


def _client_block(pdf, client):
    pdf.set_font('Helvetica', 'B', 10)
    pdf.set_text_color(*pdf.primary_color)
    pdf.cell(0, 6, 'Client', new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_font('Helvetica', '', 9)
    pdf.set_text_color(40)
    if client is None:
        pdf.cell(0, 5, 'Client non renseigné', new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        return

    for line in filter(None, [client.name, client.company, client.address, client.email, client.phone]):
        pdf.multi_cell(0, 4.5, pdf_text(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


COLUMNS = (
    ('Désignation', 80, 'L'),
    ('Qté', 20, 'R'),
    ('Prix unitaire', 32, 'R'),
    ('TVA', 18, 'R'),
    ('Total HT', 40, 'R'),
)


def _items_header(pdf):
    pdf.set_font('Helvetica', 'B', 9)
    pdf.set_fill_color(*pdf.primary_color)
    pdf.set_text_color(255)
    for label, width, align in COLUMNS:
        pdf.cell(width, 8, pdf_text(label), align=align, fill=True)
    pdf.ln(8)


def _items_table(pdf, devis):
    _items_header(pdf)
    pdf.set_font('Helvetica', '', 9)
    pdf.set_text_color(40)

    for index, article in enumerate(devis.articles.all()):
        if pdf.get_y() > 260:
            pdf.add_page()
            _items_header(pdf)
            pdf.set_font('Helvetica', '', 9)
            pdf.set_text_color(40)

        fill = index % 2 == 1
        pdf.set_fill_color(245, 247, 250)
        values = (
            article.designation[:60],
            f'{article.quantity.normalize():f}',
            format_currency(article.unit_price, devis.currency),
            f'{article.vat_rate.normalize():f} %',
            format_currency(article.total_ht, devis.currency),
        )
        for (label, width, align), value in zip(COLUMNS, values):
            pdf.cell(width, 7, pdf_text(value), align=align, fill=fill)
        pdf.ln(7)


def _totals_block(pdf, devis):
    pdf.ln(4)
    rows = (
        ('Sous-total HT', devis.subtotal_ht),
        ('TVA', devis.total_vat),
    )
    pdf.set_font('Helvetica', '', 10)
    pdf.set_text_color(60)
    for label, amount in rows:
        pdf.set_x(110)
        pdf.cell(50, 7, label)
        pdf.cell(40, 7, pdf_text(format_currency(amount, devis.currency)), align='R',
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_x(110)
    pdf.set_font('Helvetica', 'B', 11)
    pdf.set_fill_color(*pdf.primary_color)
    pdf.set_text_color(255)
    pdf.cell(50, 9, 'Total TTC', fill=True)
    pdf.cell(40, 9, pdf_text(format_currency(devis.total_ttc, devis.currency)), align='R', fill=True,
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _notes_block(pdf, notes):
    if not notes:
        return
    pdf.ln(6)
    pdf.set_font('Helvetica', 'B', 9)
    pdf.set_text_color(*pdf.primary_color)
    pdf.cell(0, 5, 'Notes', new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font('Helvetica', '', 8)
    pdf.set_text_color(80)
    pdf.multi_cell(0, 4, pdf_text(notes), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def render_quote_pdf(devis: Devis) -> bytes:
    """
    Render a quote to PDF bytes.

    Free users' documents carry a watermark line in the footer.
    """
    profile = get_or_create_profile(user=devis.user)
    color = TEMPLATE_COLORS.get(devis.template, DEFAULT_COLOR)

    pdf = QuotePDF(color, watermark=not is_premium_user(user=devis.user))
    pdf.add_page()

    top = pdf.get_y()
    _company_block(pdf, profile)
    company_bottom = pdf.get_y()
    _title_block(pdf, devis, top)
    pdf.set_y(max(company_bottom, pdf.get_y()) + 8)

    _client_block(pdf, devis.client)
    pdf.ln(6)
    _items_table(pdf, devis)
    _totals_block(pdf, devis)
    _notes_block(pdf, devis.notes)

    return bytes(pdf.output())
