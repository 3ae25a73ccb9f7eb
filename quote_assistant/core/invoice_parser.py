"""
Supplier invoice line-item extraction.

The PDF is sent to the model as a base64 document block together with a fixed
instruction. The model's answer is returned untouched; the browser client
parses the JSON itself.
"""

import base64
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

from pypdf import PdfReader

from .prompts import INVOICE_EXTRACTION_PROMPT


def build_invoice_messages(pdf_base64: str) -> List[Dict[str, Any]]:
    """
    Build the single user message carrying the PDF and extraction instruction.

    Args:
        pdf_base64: Base64-encoded PDF document

    Returns:
        Message list in Anthropic format
    """
    return [{
        "role": "user",
        "content": [
            {
                "type": "document",
                "source": {
                    "type": "base64",
                    "media_type": "application/pdf",
                    "data": pdf_base64
                }
            },
            {
                "type": "text",
                "text": INVOICE_EXTRACTION_PROMPT
            }
        ]
    }]


def extract_invoice(client: Any, pdf_base64: str, model: str, max_tokens: int) -> Dict[str, Any]:
    """Send the invoice to the model and return the raw reply."""
    return client.create_message(build_invoice_messages(pdf_base64), model=model, max_tokens=max_tokens)


def check_pdf(pdf_bytes: bytes) -> Tuple[bool, Optional[str]]:
    """
    Check that the bytes are a readable PDF with at least one page.

    Args:
        pdf_bytes: Raw PDF content

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        num_pages = len(reader.pages)
        if num_pages == 0:
            return False, "PDF has no pages"
        _ = reader.pages[0]
        return True, None
    except Exception as e:
        return False, str(e)


def encode_pdf(pdf_bytes: bytes) -> str:
    return base64.b64encode(pdf_bytes).decode()
