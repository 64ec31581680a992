import logging
from typing import Optional, TextIO
from jinja2 import Template

from rss2html.ingest.rss import validate_rss
from rss2html.util.errors import MissingElementError
from rss2html.util.xmltree import XmlNode, child_index, find_child, first_text

log = logging.getLogger(__name__)

# Fallback texts for absent or empty fields
NO_TITLE = "No Title"
NO_DESCRIPTION = "no description"
NO_PUBDATE = "pubdate doesn't exist"
NO_SOURCE = "No source available"
NO_SOURCE_LABEL = "No label exist"
NO_NEWS = "no title or description"

# Output is not escaped: feed text goes into the page as-is.
HEADER_TMPL = Template("""<html>
<head>
<title>{{ page_title }}</title>
</head>
<body>
<h1><a href="{{ link }}">{{ heading }}</a></h1>
<p>{{ description }}</p>
<table border="1">
<tr>
<th>date</th>
<th>source</th>
<th>News</th>
</tr>
""", keep_trailing_newline=True)

ROW_TMPL = Template("""<tr>
{% for cell in cells %}{{ cell }}
{% endfor %}</tr>
""", keep_trailing_newline=True)

FOOTER_TMPL = Template("""</table>
</body>
</html>
""", keep_trailing_newline=True)


def _require_tag(node: XmlNode, label: str) -> None:
    if not (node.is_tag and node.label == label):
        raise ValueError(f"expected a <{label}> tag node, got {node.label!r}")

def _require_open(out: TextIO) -> None:
    if out.closed:
        raise ValueError("output stream is closed")

def _anchor(href: str, label: str) -> str:
    return f'<a href="{href}">{label}</a>'

def _cell(content: str) -> str:
    return f"<td>{content}</td>"


# --------------------------------- header -------------------------------------

def output_header(channel: XmlNode, out: TextIO) -> None:
    """Write the opening markup: page title, linked heading, description, table head."""
    _require_tag(channel, "channel")
    _require_open(out)

    title = find_child(channel, "title")
    title_text = first_text(title)
    if title_text is not None:
        # the <title> element gets the tag's own label, the heading gets its text
        page_title, heading = title.label, title_text
    else:
        page_title, heading = NO_TITLE, NO_TITLE

    link = first_text(find_child(channel, "link"))
    if link is None:
        raise MissingElementError("channel", "link")

    description = first_text(find_child(channel, "description"))

    out.write(HEADER_TMPL.render(
        page_title=page_title,
        link=link,
        heading=heading,
        description=description if description is not None else NO_DESCRIPTION,
    ))


# ---------------------------------- cells -------------------------------------

def date_cell(item: XmlNode) -> str:
    pub_date = first_text(find_child(item, "pubDate"))
    return _cell(pub_date if pub_date is not None else NO_PUBDATE)

def source_cell(item: XmlNode) -> str:
    source = find_child(item, "source")
    if source is None:
        return _cell(NO_SOURCE)
    if not source.has_attribute("url"):
        # no url: the cell is opened and never closed
        return "<td>"
    label = first_text(source)
    return _cell(_anchor(source.attribute_value("url"), label if label is not None else NO_SOURCE_LABEL))

def news_cell(item: XmlNode) -> Optional[str]:
    """Title link, else description link, else a placeholder anchor.

    Returns None when a title exists but has no text or the item has no link;
    no cell is written for that row.
    """
    has_link = child_index(item, "link") is not None
    link = first_text(find_child(item, "link")) or ""

    title = find_child(item, "title")
    if title is not None:
        title_text = first_text(title)
        if title_text is not None and has_link:
            return _cell(_anchor(link, title_text))
        return None

    description = first_text(find_child(item, "description"))
    if description is not None and has_link:
        return _cell(_anchor(link, description))
    return _cell(_anchor("", NO_NEWS))


# ---------------------------------- rows --------------------------------------

def process_item(item: XmlNode, out: TextIO) -> None:
    """Write one table row: date, source, news."""
    _require_tag(item, "item")
    _require_open(out)
    cells = [c for c in (date_cell(item), source_cell(item), news_cell(item)) if c is not None]
    out.write(ROW_TMPL.render(cells=cells))

def output_footer(out: TextIO) -> None:
    _require_open(out)
    out.write(FOOTER_TMPL.render())


# ---------------------------------- feed --------------------------------------

def render_feed(root: XmlNode, out: TextIO) -> int:
    """Render a whole <rss version="2.0"> document; returns the number of rows."""
    validate_rss(root)
    if root.child_count == 0:
        raise MissingElementError("rss", "channel")
    channel = root.child(0)

    output_header(channel, out)
    rows = 0
    for node in channel.children:
        if node.is_tag and node.label == "item":
            process_item(node, out)
            rows += 1
    output_footer(out)
    log.debug(f"[render] {rows} item rows")
    return rows
