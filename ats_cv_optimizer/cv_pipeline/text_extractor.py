"""Extract raw text from uploaded CV files (PDF, DOCX). In-memory only."""

from io import BytesIO
from typing import Iterator, Union

import pdfplumber
from docx import Document
from docx.table import Table
from pdfminer.pdfdocument import PDFPasswordIncorrect

from ats_cv_optimizer.errors import CorruptDocumentError, PasswordProtectedError, UnsupportedFormatError
from ats_cv_optimizer.schemas.document import DocumentFormat, ExtractionResult
from ats_cv_optimizer.utils.logger import get_logger

logger = get_logger(__name__)


def _is_password_error(exc: BaseException) -> bool:
    """Walk the exception chain; pdfplumber wraps pdfminer errors in its own exception type."""
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, PDFPasswordIncorrect):
            return True
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        pending.append(current.__cause__)
        pending.append(current.__context__)
    return False


def _map_pdf_error(exc: Exception) -> Exception:
    if _is_password_error(exc):
        return PasswordProtectedError("PDF requires a password")
    return CorruptDocumentError(DocumentFormat.PDF.value, str(exc))


def _extract_pdf(bytes_io: BytesIO) -> ExtractionResult:
    """Extract the text layer page by page using pdfplumber."""
    try:
        pdf = pdfplumber.open(bytes_io)
    except Exception as e:
        raise _map_pdf_error(e) from e
    with pdf:
        try:
            parts = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            raise _map_pdf_error(e) from e
    return ExtractionResult(text="\n".join(parts), page_count=len(parts))


def _iter_table_text(table: Table) -> Iterator[str]:
    for row in table.rows:
        seen_cells = set()
        cells = []
        for cell in row.cells:
            # Merged cells repeat the same underlying element
            if id(cell._tc) in seen_cells:
                continue
            seen_cells.add(id(cell._tc))
            cells.append(cell.text)
        yield "\t".join(cells)


def _iter_docx_blocks(doc) -> Iterator[str]:
    """Paragraph and table text in body order."""
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            yield from _iter_table_text(block)
        else:
            yield block.text


def _extract_docx(bytes_io: BytesIO) -> ExtractionResult:
    """Extract body text from DOCX using python-docx, ignoring styling."""
    try:
        doc = Document(bytes_io)
        parts = list(_iter_docx_blocks(doc))
    except Exception as e:
        raise CorruptDocumentError(DocumentFormat.DOCX.value, str(e)) from e
    # DOCX has no page model; count it as one page
    return ExtractionResult(text="\n".join(parts), page_count=1)


def extract_text(file_bytes: bytes, document_format: Union[DocumentFormat, str]) -> ExtractionResult:
    """
    Extract the text of a CV file (PDF or DOCX) and its page count.
    Raises UnsupportedFormatError, PasswordProtectedError or CorruptDocumentError.
    """
    try:
        fmt = DocumentFormat(document_format)
    except ValueError:
        raise UnsupportedFormatError(f"Unsupported document format: {document_format!r}") from None

    bio = BytesIO(file_bytes)
    if fmt is DocumentFormat.PDF:
        result = _extract_pdf(bio)
    else:
        result = _extract_docx(bio)
    logger.info(
        "Extracted %s text: pages=%s chars=%s", fmt.value, result.page_count, len(result.text)
    )
    return result
