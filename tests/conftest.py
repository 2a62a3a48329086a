import io
import os
import stat
import sys
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv
from PIL import Image

from ocrbridge.infrastructure.tesseract import TesseractCLIEngine
from ocrbridge.schemas.configs import SearchPaths, TesseractCLIConfig

FAKE_TESSERACT = '''#!{python}
import json
import os
import sys
import time

args = sys.argv[1:]
input_path, output_prefix = args[0], args[1]
language = args[args.index("-l") + 1]
dpi = args[args.index("--dpi") + 1]
mode = args[-1]
prefix = os.environ.get("TESSDATA_PREFIX", "")

record = os.environ.get("FAKE_TESSERACT_RECORD")
if record:
    with open(record, "a", encoding="utf-8") as f:
        f.write(json.dumps({{
            "args": args,
            "language": language,
            "dpi": dpi,
            "mode": mode,
            "tessdata_prefix": prefix,
            "pid": os.getpid(),
        }}) + "\\n")

behavior = os.environ.get("FAKE_TESSERACT_BEHAVIOR", "ok")
if behavior == "fail":
    sys.stderr.write("  Error, Unsupported image format\\n")
    sys.exit(1)
if behavior == "sleep":
    time.sleep(30)
if behavior == "no-output":
    sys.exit(0)

for code in language.split("+"):
    if not os.path.isfile(os.path.join(prefix, code + ".traineddata")):
        sys.stderr.write("Error opening data file " + code + ".traineddata\\n")
        sys.exit(1)

with open(input_path, "rb") as f:
    data = f.read()

if mode == "tsv":
    body = (
        "level\\tpage_num\\tblock_num\\tpar_num\\tline_num\\tword_num\\t"
        "left\\ttop\\twidth\\theight\\tconf\\ttext\\n"
        "1\\t1\\t0\\t0\\t0\\t0\\t0\\t0\\t200\\t100\\t-1\\t\\n"
        "5\\t1\\t1\\t1\\t1\\t1\\t10\\t20\\t40\\t30\\t95.5\\tHello\\n"
        "5\\t1\\t1\\t1\\t1\\t2\\t60\\t20\\t50\\t30\\t90\\tWorld\\n"
    )
elif os.environ.get("FAKE_TESSERACT_ECHO"):
    body = data.decode("utf-8")
else:
    body = os.environ.get("FAKE_TESSERACT_TEXT", "")

with open(output_prefix + "." + mode, "w", encoding="utf-8") as f:
    f.write(body)
'''



@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_once_for_everybody() -> None:
    """Load .env file once per test session."""
    load_dotenv()


@pytest.fixture(autouse=True)
def _clean_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer overrides from leaking into tests."""
    for name in (
        "TESSERACT_PATH",
        "TESSDATA_PREFIX",
        "FAKE_TESSERACT_BEHAVIOR",
        "FAKE_TESSERACT_ECHO",
        "FAKE_TESSERACT_RECORD",
        "FAKE_TESSERACT_TEXT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_fake_engine() -> Callable[[Path], Path]:
    """Return a factory writing an executable fake tesseract into a directory."""

    def _write(directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "tesseract"
        path.write_text(FAKE_TESSERACT.format(python=sys.executable), encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _write


@pytest.fixture
def bundle(tmp_path: Path, write_fake_engine: Callable[[Path], Path]) -> Path:
    """A macOS style app bundle with a fake binary and English tessdata.

    Layout:
        Bundle.app/Contents/MacOS/tesseract
        Bundle.app/Contents/Resources/tessdata/eng.traineddata
    """
    contents = tmp_path / "Bundle.app" / "Contents"
    write_fake_engine(contents / "MacOS")
    tessdata = contents / "Resources" / "tessdata"
    tessdata.mkdir(parents=True)
    (tessdata / "eng.traineddata").write_bytes(b"fake-model")
    return contents


@pytest.fixture
def scratch_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect temporary directories so leftovers can be counted."""
    root = tmp_path / "scratch"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def engine_config(bundle: Path) -> TesseractCLIConfig:
    return TesseractCLIConfig(
        executable_dir=bundle / "MacOS",
        resource_dir=bundle / "Resources",
        search_paths=SearchPaths(engine=[], tessdata=[]),
        timeout_seconds=20,
    )


@pytest.fixture
def engine(engine_config: TesseractCLIConfig) -> TesseractCLIEngine:
    return TesseractCLIEngine.from_config(engine_config)


@pytest.fixture
def blank_png() -> bytes:
    """A small blank white PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (200, 100), color="white").save(buffer, format="PNG")
    return buffer.getvalue()
