import argparse
import sys
from pathlib import Path

import structlog
from dotenv import load_dotenv

from ocrbridge import OcrError, OutputMode, perform_recognition
from ocrbridge.infrastructure.tesseract import parse_tsv_words
from ocrbridge.shared.logging import setup_logging

logger = structlog.get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run tesseract on a single image")
    parser.add_argument("image", type=Path)
    parser.add_argument("-l", "--language", default=None)
    parser.add_argument("--tsv", action="store_true", help="Print TSV instead of text")
    parser.add_argument("--words", action="store_true", help="Print one word box per line")
    args = parser.parse_args(argv)

    load_dotenv()
    setup_logging()

    mode = OutputMode.TSV if args.tsv or args.words else OutputMode.TEXT
    try:
        output = perform_recognition(args.image.read_bytes(), args.language, mode)
    except (OcrError, OSError) as e:
        logger.error("recognition_failed", image=str(args.image), error=str(e))
        return 1

    if args.words:
        for word in parse_tsv_words(output):
            print(*word.bbox, word.text, sep="\t")
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
