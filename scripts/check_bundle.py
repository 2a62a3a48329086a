import argparse
from pathlib import Path

from ocrbridge.diagnostics import check_bundle
from ocrbridge.shared.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Verify bundled OCR assets before a release")
    parser.add_argument("resources", type=Path, help="Directory shipped as app resources")
    parser.add_argument("--binary-dir", type=Path, default=None)
    parser.add_argument("-l", "--language", action="append", dest="languages")
    args = parser.parse_args(argv)

    setup_logging()
    report = check_bundle(args.resources, args.binary_dir, args.languages or ["eng"])
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
