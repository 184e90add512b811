from typing import List, Optional, Sequence, Tuple


def find_line(lines: Sequence[str], term: str, start: int = 0) -> Optional[int]:
    """Index of the first line at or after ``start`` containing ``term``.

    Literal, case-sensitive, no wraparound. Returns None when nothing
    matches or ``term`` is empty.
    """
    if not term:
        return None
    for idx in range(max(0, start), len(lines)):
        if term in lines[idx]:
            return idx
    return None


def split_matches(line: str, term: Optional[str]) -> List[Tuple[str, bool]]:
    """Split ``line`` into (text, is_match) segments, left to right."""
    if not term:
        return [(line, False)] if line else []
    segments = []
    pos = 0
    while True:
        hit = line.find(term, pos)
        if hit < 0:
            break
        if hit > pos:
            segments.append((line[pos:hit], False))
        segments.append((term, True))
        pos = hit + len(term)
    if pos < len(line):
        segments.append((line[pos:], False))
    return segments
