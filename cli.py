"""
Command-line interface for the quote assistant functions.

Runs invoice extraction on a local PDF, or a pricing conversation on a local
options file, against the Anthropic API without deploying the Lambda handlers.
"""

import sys
import json
import argparse
from pathlib import Path

from dotenv import load_dotenv

from quote_assistant.core.anthropic_client import AnthropicClient
from quote_assistant.core.errors import ConfigurationError
from quote_assistant.core.invoice_parser import check_pdf, encode_pdf, extract_invoice
from quote_assistant.core.models import ConversationMessage, PricingOption
from quote_assistant.core.pricing import request_pricing_advice
from quote_assistant.utils.config import load_settings
from quote_assistant.utils.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quote-assistant",
        description="Extract supplier invoice line items or get AI pricing advice using the Anthropic API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  quote-assistant parse-invoice ./supplier-quote.pdf
  quote-assistant price options.json --message "Client is price sensitive" --project "CCTV upgrade" --client "Smith"

Environment Variables:
  ANTHROPIC_API_KEY - Anthropic API key (or pass --api-key to parse-invoice)
  ANTHROPIC_API_KEY_SECRET_NAME - AWS Secrets Manager secret holding the key
  INVOICE_MODEL, PRICING_MODEL - Model overrides
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    invoice_parser = subparsers.add_parser("parse-invoice", help="Extract line items from a supplier PDF")
    invoice_parser.add_argument("pdf_path", help="Path to the PDF invoice or quotation")
    invoice_parser.add_argument("--api-key", help="Anthropic API key (default: ANTHROPIC_API_KEY)")

    price_parser = subparsers.add_parser("price", help="Get pricing recommendations for quote options")
    price_parser.add_argument("options_path", help="JSON file with a list of pricing options")
    price_parser.add_argument("--message", required=True, help="Context or feedback for the pricing strategist")
    price_parser.add_argument("--project", default="", help="Project name")
    price_parser.add_argument("--client", default="", help="Client name")
    price_parser.add_argument("--history", help="JSON file with prior conversation messages")

    return parser


def run_parse_invoice(args, settings, logger) -> dict:
    pdf_bytes = Path(args.pdf_path).read_bytes()

    is_valid, error = check_pdf(pdf_bytes)
    if not is_valid:
        raise ValueError(f"Not a readable PDF: {error}")

    api_key = args.api_key or settings.anthropic_api_key
    if not api_key:
        raise ConfigurationError("No API key: pass --api-key or set ANTHROPIC_API_KEY")

    client = AnthropicClient.from_settings(settings, api_key=api_key, logger=logger)
    logger.info(f"Parsing invoice: {args.pdf_path}")
    return extract_invoice(client, encode_pdf(pdf_bytes), settings.invoice_model, settings.max_tokens)


def run_price(args, settings, logger) -> dict:
    if not settings.anthropic_api_key:
        raise ConfigurationError("Server not configured: missing ANTHROPIC_API_KEY.")

    raw_options = json.loads(Path(args.options_path).read_text(encoding="utf-8"))
    options = [PricingOption.from_dict(option) for option in raw_options]

    history = []
    if args.history:
        raw_history = json.loads(Path(args.history).read_text(encoding="utf-8"))
        history = [ConversationMessage.from_dict(message) for message in raw_history]

    client = AnthropicClient.from_settings(settings, logger=logger)
    logger.info(f"Requesting pricing advice for {len(options)} options")
    advice = request_pricing_advice(
        client,
        args.message,
        options,
        model=settings.pricing_model,
        max_tokens=settings.max_tokens,
        project_name=args.project,
        client_name=args.client,
        history=history,
        logger=logger,
    )
    return advice.to_dict()


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logger = setup_logger("quote-assistant")

    try:
        caller_key = args.command == "parse-invoice" and bool(args.api_key)
        settings = load_settings(resolve_api_key=not caller_key)
        if args.command == "parse-invoice":
            result = run_parse_invoice(args, settings, logger)
        else:
            result = run_price(args, settings, logger)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)

    print(json.dumps(result, indent=2))
    sys.exit(0)


def run():
    """Console script entry point: loads .env before running."""
    load_dotenv()
    main()


if __name__ == "__main__":
    run()
