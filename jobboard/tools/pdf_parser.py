"""
PDF text extraction for CV analysis.

Extracts text content from PDF files using pypdf.
"""

from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from jobboard.errors import ValidationError


def parse_pdf(pdf_content: bytes) -> str:
    """
    Extract text from a PDF file.

    Args:
        pdf_content: Raw bytes of the PDF file

    Returns:
        Extracted text content from all pages

    Raises:
        ValidationError: if the bytes are not a readable PDF
    """
    try:
        reader = PdfReader(BytesIO(pdf_content))
        text_parts = []

        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)

    except (PdfReadError, ValueError) as e:
        raise ValidationError(f"Failed to parse PDF: {e}") from e

    return "\n\n".join(text_parts)
