"""Minimal Org outline reader: headlines, todo keywords, planning lines.

Only what the task export needs is recognized. Unknown lines are ignored and
nothing here raises on odd input; a value that cannot be read is left unset.
"""

from __future__ import annotations

import re

from orgtaskcsv.org.model import Bound, Node, NodeKind, OrgDocument, TimeRange

HEADLINE_RE = re.compile(r"^(\*+)[ \t]+(.*?)[ \t]*$")
PRIORITY_RE = re.compile(r"^\[#([A-Za-z]|\d+)\][ \t]*")
TAGS_RE = re.compile(r"(?:^|[ \t]+)(:[\w@#%:]+:)[ \t]*$")
KEYWORD_RE = re.compile(r"^#\+(\w+):[ \t]*(.*?)[ \t]*$")
PLANNING_RE = re.compile(
    r"(SCHEDULED|DEADLINE|CLOSED):[ \t]*"
    r"(<[^>\n]*>(?:--<[^>\n]*>)?|\[[^\]\n]*\](?:--\[[^\]\n]*\])?)"
)
STAMP_RE = re.compile(
    r"(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:[ \t]+[^\d \t>\]][^ \t>\]]*)?"
    r"(?:[ \t]+(\d{1,2}):(\d{2})(?:-(\d{1,2}):(\d{2}))?)?"
)
RANGE_SEP_RE = re.compile(r"(?<=[>\]])--(?=[<\[])")

TODO_SETTINGS = ("TODO", "SEQ_TODO", "TYP_TODO")


def _int(value: str | None) -> int | None:
    return int(value) if value is not None else None


def _parse_stamp(text: str) -> tuple[Bound, Bound] | None:
    """Parse one ``<...>`` or ``[...]`` stamp into its (start, end) bounds."""
    m = STAMP_RE.search(text)
    if not m:
        return None
    year, month, day = _int(m.group(1)), _int(m.group(2)), _int(m.group(3))
    start = Bound(year, month, day, _int(m.group(4)), _int(m.group(5)))
    if m.group(6) is not None:
        end = Bound(year, month, day, _int(m.group(6)), _int(m.group(7)))
    else:
        end = start
    return start, end


def parse_timestamp(text: str) -> TimeRange | None:
    """Parse a timestamp or a ``<a>--<b>`` date range.

    A single stamp gets ``end == start`` unless it carries a time span
    (``10:00-12:00``), in which case the end bound holds the end time.
    """
    parts = RANGE_SEP_RE.split(text, maxsplit=1)
    parsed = _parse_stamp(parts[0])
    if parsed is None:
        return None
    start, end = parsed
    if len(parts) > 1:
        other = _parse_stamp(parts[1])
        if other is not None:
            end = other[0]
    return TimeRange(start=start, end=end)


def _parse_todo_setting(value: str) -> tuple[list[str], list[str]]:
    words = [re.sub(r"\(.*\)$", "", w) for w in value.split()]
    if "|" in words:
        split = words.index("|")
        todo, done = words[:split], words[split + 1:]
    else:
        todo, done = words[:-1], words[-1:]
    return [w for w in todo if w], [w for w in done if w]


def _read_settings(lines: list[str], doc: OrgDocument) -> None:
    """Collect ``#+TITLE``, ``#+CATEGORY`` and todo keyword declarations."""
    todo: list[str] = []
    done: list[str] = []
    for line in lines:
        m = KEYWORD_RE.match(line)
        if not m:
            continue
        key, value = m.group(1).upper(), m.group(2)
        if key == "TITLE" and not doc.title:
            doc.title = value
        elif key == "CATEGORY":
            doc.category = value
        elif key in TODO_SETTINGS:
            t, d = _parse_todo_setting(value)
            todo.extend(t)
            done.extend(d)
    if todo or done:
        doc.todo_keywords = todo
        doc.done_keywords = done


def _parse_priority(cookie: str) -> int | None:
    value = int(cookie) if cookie.isdigit() else ord(cookie.upper())
    return value if value > 0 else None


def _parse_headline(stars: str, rest: str, doc: OrgDocument) -> Node:
    node = Node(kind=NodeKind.HEADLINE, level=len(stars))

    parts = rest.split(None, 1)
    if parts and parts[0] in doc.todo_keywords + doc.done_keywords:
        node.todo_keyword = parts[0]
        node.todo_type = "done" if parts[0] in doc.done_keywords else "todo"
        rest = parts[1] if len(parts) > 1 else ""

    m = PRIORITY_RE.match(rest)
    if m:
        node.priority = _parse_priority(m.group(1))
        rest = rest[m.end():]

    m = TAGS_RE.search(rest)
    if m:
        node.tags = [t for t in m.group(1).split(":") if t]
        rest = rest[: m.start()]

    node.title = rest.strip()
    return node


def _apply_planning(line: str, node: Node) -> None:
    """Attach planning timestamps found on *line* to *node*."""
    for m in PLANNING_RE.finditer(line):
        value = parse_timestamp(m.group(2))
        match m.group(1):
            case "SCHEDULED":
                node.scheduled = value
            case "DEADLINE":
                node.deadline = value
            case "CLOSED":
                node.closed = value


def parse_document(text: str, source: str = "") -> OrgDocument:
    """Parse Org *text* into an :class:`OrgDocument`."""
    lines = text.splitlines()
    doc = OrgDocument(source=source)
    _read_settings(lines, doc)

    # (level, index) of the open headlines, innermost last
    open_headlines: list[tuple[int, int]] = []
    last: Node | None = None

    for line in lines:
        m = HEADLINE_RE.match(line)
        if m:
            node = _parse_headline(m.group(1), m.group(2), doc)
            while open_headlines and open_headlines[-1][0] >= node.level:
                open_headlines.pop()
            parent = open_headlines[-1][1] if open_headlines else 0
            index = doc.add(node, parent)
            open_headlines.append((node.level, index))
            last = node
            continue

        # Planning info is only recognized on the line right after a headline.
        if last is not None:
            _apply_planning(line, last)
            last = None

    return doc
