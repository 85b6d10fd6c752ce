import re

from .puzzle import Puzzle, RegionSpec
from .shape import SHAPE_SIZE, Shape

SHAPE_HEADER_RE = re.compile(r'^(\d+):$')
REGION_RE = re.compile(r'^(\d+)x(\d+):((?:\s+\S+)+)$')
SHAPE_ROW_RE = re.compile(rf'^[#.]{{{SHAPE_SIZE}}}$')


class ParseError(ValueError):
    def __init__(self, message: str, line_no: int = None):
        if line_no is not None:
            message = f'line {line_no}: {message}'
        super().__init__(message)
        self.line_no = line_no


def parse_shape(rows: list[str], line_no: int = None) -> Shape:
    if len(rows) != SHAPE_SIZE:
        raise ParseError(f'Expected {SHAPE_SIZE} shape rows, got {len(rows)}', line_no)
    for offset, row in enumerate(rows):
        if not SHAPE_ROW_RE.match(row):
            raise ParseError(f'Bad shape row {row!r}', None if line_no is None else line_no + offset)

    shape = Shape.from_rows(rows)
    if not shape.area:
        raise ParseError('Shape has no occupied cells', line_no)
    return shape


def parse_region(line: str, shape_count: int, line_no: int = None) -> RegionSpec:
    match = REGION_RE.match(line)
    if not match:
        raise ParseError(f'Bad region line {line!r}', line_no)

    width, height = int(match.group(1)), int(match.group(2))
    if width < 1 or height < 1:
        raise ParseError(f'Region {width}x{height} must be at least 1x1', line_no)

    try:
        counts = tuple(int(part) for part in match.group(3).split())
    except ValueError:
        raise ParseError(f'Non-numeric shape count in {line!r}', line_no) from None
    if any(count < 0 for count in counts):
        raise ParseError(f'Negative shape count in {line!r}', line_no)
    if len(counts) > shape_count:
        raise ParseError(f'Got {len(counts)} counts for {shape_count} shapes', line_no)
    return RegionSpec(width, height, counts)


def parse_puzzle(text: str) -> Puzzle:
    lines = [line.rstrip() for line in text.splitlines()]
    shapes = []
    regions = []

    i = 0
    while i < len(lines):
        line = lines[i]
        line_no = i + 1
        if not line:
            i += 1
            continue

        header = SHAPE_HEADER_RE.match(line)
        if header:
            if regions:
                raise ParseError('Shape definition after regions', line_no)
            label = int(header.group(1))
            if label != len(shapes):
                raise ParseError(f'Expected shape {len(shapes)}, got {label}', line_no)
            rows = []
            i += 1
            while i < len(lines) and lines[i]:
                rows.append(lines[i])
                i += 1
            shapes.append(parse_shape(rows, line_no + 1))
            continue

        if not shapes:
            raise ParseError('Region declared before any shape', line_no)
        regions.append(parse_region(line, len(shapes), line_no))
        i += 1

    if not shapes:
        raise ParseError('No shapes found')
    if not regions:
        raise ParseError('No regions found')
    return Puzzle(tuple(shapes), tuple(regions))
