#!/usr/bin/env python3
"""Process a bank statement PDF through the intake pipeline."""
import asyncio
import json
import mimetypes
import sys
from pathlib import Path

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from statement_intake.config import Settings
from statement_intake.intake.file_validation import format_file_size
from statement_intake.models.upload import UploadedFile
from statement_intake.pipeline import IntakePipeline
from statement_intake.utils.logging import setup_logging


async def main(pdf_path: str, locale: str | None) -> None:
    """Process a single PDF and print the formatted statement."""
    path = Path(pdf_path)
    if not path.exists():
        print(f"Error: File not found: {pdf_path}")
        sys.exit(1)

    settings = Settings()
    setup_logging(settings.log_level, json_logs=False)
    pipeline = IntakePipeline(settings)

    file_bytes = path.read_bytes()
    upload = UploadedFile(
        filename=path.name,
        mime_type=mimetypes.guess_type(path.name)[0] or "application/octet-stream",
        size_bytes=len(file_bytes),
    )

    print(f"Processing: {path.name} ({format_file_size(upload.size_bytes)})")
    print("-" * 50)

    result = await pipeline.process(upload, file_bytes, locale)
    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)

    display = result.display
    print(f"Bank: {display.bank_name or '-'}")
    print(f"Account holder: {display.account_holder_name or '-'}")
    print(f"Account: {display.account_number or '-'}")
    if display.statement_period:
        print(f"Period: {display.statement_period.from_date} - {display.statement_period.to_date}")
    print(f"Balance: {display.balance or '-'} {display.currency or ''}")
    print(f"\nTransactions ({display.transaction_count}):")
    for tx in display.transactions:
        print(f"  {tx.date:<12} {tx.amount:>15}  {tx.description}")

    output_path = path.with_suffix(".json")
    output_path.write_text(json.dumps(result.model_dump(mode="json"), indent=2), encoding="utf-8")
    print(f"\nFull result saved to: {output_path}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/process_pdf.py <path-to-pdf> [locale]")
        sys.exit(1)

    asyncio.run(main(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None))
