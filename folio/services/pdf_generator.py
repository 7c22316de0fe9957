"""Service for generating PDF from rendered CV HTML."""

# A4 portrait with the margins the CV layouts are designed for
PAGE_CSS = """
    @page {
        size: A4;
        margin: 18px;
    }
"""


class PDFGenerator:
    """Service to generate PDF from HTML using WeasyPrint."""

    def __init__(self, page_css: str = PAGE_CSS):
        """
        Initialize the PDF generator.

        Args:
            page_css: CSS applied on top of the document for page settings
        """
        self.page_css = page_css

    def generate_pdf(self, html_content: str) -> bytes:
        """
        Generate PDF from a complete HTML document.

        Args:
            html_content: Rendered HTML document

        Returns:
            bytes: PDF file as bytes
        """
        # Imported here so the rest of the app runs without the native pango libraries
        from weasyprint import HTML as WeasyHTML, CSS

        html = WeasyHTML(string=html_content)
        page_css = CSS(string=self.page_css)
        return html.write_pdf(stylesheets=[page_css])
