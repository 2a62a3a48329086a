"""Helpers for tesseract TSV output."""

from dataclasses import dataclass

BBox = tuple[int, int, int, int]

TSV_COLUMNS = (
    "level",
    "page_num",
    "block_num",
    "par_num",
    "line_num",
    "word_num",
    "left",
    "top",
    "width",
    "height",
    "conf",
    "text",
)

# Level 5 corresponds to word level
WORD_LEVEL = 5


@dataclass(frozen=True)
class OCRWord:
    """A single recognised word with its pixel box.

    Attributes:
        text: Word text, stripped
        left: Left edge in pixels
        top: Top edge in pixels
        width: Box width in pixels
        height: Box height in pixels
        conf: Engine confidence (0-100, -1 when unknown)
    """

    text: str
    left: int
    top: int
    width: int
    height: int
    conf: float = -1.0

    @property
    def bbox(self) -> BBox:
        """Box as (x1, y1, x2, y2)."""
        return (self.left, self.top, self.left + self.width, self.top + self.height)

    def normalized_bbox(self, image_width: float, image_height: float) -> BBox:
        """Box scaled to the 0-1000 range used by layout models.

        Raises:
            ValueError: If either image dimension is not positive.
        """
        if image_width <= 0 or image_height <= 0:
            raise ValueError(f"Image size must be positive, got {image_width}x{image_height}")
        x1, y1, x2, y2 = self.bbox
        return (
            int(1000 * x1 / image_width),
            int(1000 * y1 / image_height),
            int(1000 * x2 / image_width),
            int(1000 * y2 / image_height),
        )


def _int(value: str) -> int:
    try:
        return int(float(value))
    except ValueError:
        return 0


def parse_tsv_words(tsv: str) -> list[OCRWord]:
    """Extract word rows from tesseract TSV output.

    Columns are located by the header row, so reordered or extra columns
    are tolerated. Rows that are not words or carry no text are skipped.
    """
    lines = tsv.splitlines()
    if not lines:
        return []

    header = lines[0].split("\t")
    index = {name: header.index(name) for name in TSV_COLUMNS if name in header}
    if "text" not in index or "level" not in index:
        return []

    def cell(row: list[str], name: str) -> str:
        i = index.get(name)
        if i is None or i >= len(row):
            return ""
        return row[i]

    words: list[OCRWord] = []
    for line in lines[1:]:
        if not line:
            continue
        row = line.split("\t")
        text = cell(row, "text").strip()
        if _int(cell(row, "level")) != WORD_LEVEL or _int(cell(row, "word_num")) <= 0 or not text:
            continue
        conf = cell(row, "conf")
        try:
            confidence = float(conf) if conf else -1.0
        except ValueError:
            confidence = -1.0
        words.append(
            OCRWord(
                text=text,
                left=_int(cell(row, "left")),
                top=_int(cell(row, "top")),
                width=_int(cell(row, "width")),
                height=_int(cell(row, "height")),
                conf=confidence,
            )
        )
    return words


def words_to_text(words: list[OCRWord]) -> str:
    return " ".join(word.text for word in words)
