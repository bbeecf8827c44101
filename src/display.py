"""Terminal rendering of a BoardView: a table of rows plus the counts line.

Only consumes the view model; never touches the store.
"""
from typing import Dict, List, Sequence
from view import BoardView, Row
from theme import color, BADGE_COLOR, PRIMARY, BOLD
import re, shutil

COLUMNS = ('id', 'name', 'category', 'deadline', 'status')
HEADER_TITLES: Dict[str, str] = {
    'id': 'ID', 'name': 'TASK', 'category': 'CATEGORY', 'deadline': 'DEADLINE', 'status': 'STATUS',
}
MIN_NAME_WIDTH = 12
SEP = " | "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def _cells(row: Row) -> Dict[str, str]:
    return {
        'id': row.id[:8],
        'name': row.name,
        'category': row.category or '-',
        'deadline': row.deadline_or_blank,
        'status': row.status,
    }


def compute_widths(rows: Sequence[Row], term_width: int) -> Dict[str, int]:
    """Fixed columns take what they need; the name column gets the rest."""
    widths = {c: len(HEADER_TITLES[c]) for c in COLUMNS}
    for row in rows:
        for c, text in _cells(row).items():
            widths[c] = max(widths[c], len(text))
    fixed = sum(widths[c] for c in COLUMNS if c != 'name') + len(SEP) * (len(COLUMNS) - 1)
    widths['name'] = max(MIN_NAME_WIDTH, min(widths['name'], term_width - fixed))
    return widths


def wrap(text: str, width: int) -> List[str]:
    """Greedy word wrap; words longer than the width are hard-split."""
    lines: List[str] = []
    current = ''
    for w in text.split():
        while len(w) > width:
            if current:
                lines.append(current)
                current = ''
            lines.append(w[:width])
            w = w[width:]
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= width:
            current = candidate
        else:
            lines.append(current)
            current = w
    if current:
        lines.append(current)
    return lines or ['']


def _pad(text: str, width: int) -> str:
    pad = width - visible_len(text)
    return text + ' ' * pad if pad > 0 else text


def render_lines(view: BoardView, term_width: int = 100) -> List[str]:
    widths = compute_widths(view.rows, term_width)
    out: List[str] = []
    out.append(SEP.join(_pad(color(HEADER_TITLES[c], PRIMARY, BOLD), widths[c]) for c in COLUMNS))
    out.append(SEP.join(color('-' * widths[c], PRIMARY) for c in COLUMNS))
    if not view.rows:
        out.append(color('(no tasks)', PRIMARY))
    for row in view.rows:
        cells = _cells(row)
        badge_col = BADGE_COLOR.get(row.badge, '')
        name_lines = wrap(cells['name'], widths['name'])
        for i, name_line in enumerate(name_lines):
            first = i == 0
            parts = [
                _pad(color(cells['id'], PRIMARY, BOLD) if first else '', widths['id']),
                _pad(name_line, widths['name']),
                _pad(cells['category'] if first else '', widths['category']),
                _pad(cells['deadline'] if first else '', widths['deadline']),
                _pad(color(cells['status'], badge_col) if first else '', widths['status']),
            ]
            out.append(SEP.join(parts).rstrip())
    c = view.counts
    out.append('')
    out.append(f'All: {c.all}  In Progress: {c.in_progress}  Completed: {c.completed}  Overdue: {c.overdue}')
    out.append(f'Filter: status={view.status_filter}  category={view.category_filter}')
    return out


def display(view: BoardView) -> None:
    term_width = shutil.get_terminal_size((100, 30)).columns
    for line in render_lines(view, term_width):
        print(line)
