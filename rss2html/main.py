import io, os, sys, yaml, logging, argparse
from typing import List, Dict
from dotenv import load_dotenv

from rss2html.ingest.rss import load_tree, validate_rss
from rss2html.format.html import render_feed
from rss2html.util.errors import InvalidFeedError, RssReaderError

log = logging.getLogger(__name__)

INVALID_MESSAGE = "invalid url"


# --------------------------------- logging ------------------------------------

def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )


# --------------------------------- convert ------------------------------------

def html_filename(name: str) -> str:
    name = name.strip()
    return name if name.lower().endswith(".html") else f"{name}.html"

def convert(source: str, output: str, timeout: float | None = None) -> str:
    """Convert one RSS 2.0 feed into an HTML file; returns the written path.

    The page is rendered in memory and the file is only opened once rendering
    succeeded, so a feed that fails validation or rendering leaves nothing on disk.
    """
    root = load_tree(source, timeout=timeout)
    validate_rss(root)

    buf = io.StringIO()
    rows = render_feed(root, buf)

    path = html_filename(output)
    with open(path, "w", encoding="utf-8") as out:
        out.write(buf.getvalue())
    log.debug(f"[render] {source} -> {path} ({rows} items)")
    return path


# ---------------------------------- batch -------------------------------------

def load_feeds(path: str) -> List[Dict]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or []

def convert_all(feeds: List[Dict], timeout: float | None = None) -> int:
    """Convert every feed in the list; returns how many failed."""
    failed = 0
    for f in feeds:
        name = f.get("name", f["url"])
        try:
            path = convert(f["url"], f.get("output") or name, timeout=timeout)
            print(f"Wrote {name} to: {path}")
        except InvalidFeedError as e:
            log.warning(f"[batch] {name}: {INVALID_MESSAGE} ({e})")
            failed += 1
        except (RssReaderError, ValueError) as e:
            # ValueError: the feed is RSS 2.0 but its structure breaks a renderer precondition
            log.warning(f"[batch] skipped {name} ({f['url']}) due to: {e}")
            failed += 1
    return failed


# --------------------------------- CLI args -----------------------------------

def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Convert an RSS 2.0 feed into an HTML table page")
    p.add_argument("url", nargs="?", default=None, help="Feed URL or local XML file (prompted if omitted)")
    p.add_argument("-o", "--output", type=str, default=None, help="Output file name, .html is appended (prompted if omitted)")
    p.add_argument("--feeds", type=str, default=None, help="YAML list of {name, url, output} feeds to convert")
    p.add_argument("--timeout", type=float, default=None, help="Override RSS_FETCH_TIMEOUT (seconds)")
    p.add_argument("--debug", action="store_true", help="Verbose debug logging to stderr")
    return p.parse_args(argv)


# ----------------------------------- main -------------------------------------

def main(argv=None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    debug = args.debug or bool(os.getenv("DEBUG"))
    _setup_logging(debug)

    feeds_path = args.feeds or os.getenv("RSS_FEEDS_PATH")
    if feeds_path:
        feeds = load_feeds(feeds_path)
        log.debug(f"[config] feeds= {[f.get('name', f['url']) for f in feeds]}")
        return 1 if convert_all(feeds, timeout=args.timeout) else 0

    source = args.url or input("Enter an RSS 2.0 URL: ")
    output = args.output or input("Enter output file name: ")

    try:
        path = convert(source, output, timeout=args.timeout)
    except InvalidFeedError as e:
        log.debug(f"[validate] {e}")
        print(INVALID_MESSAGE)
        return 1
    except RssReaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote feed to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())


# Local examples:
# python -m rss2html.main https://news.yahoo.com/rss/ -o yahoo
# python -m rss2html.main feed.xml -o out.html --debug
# python -m rss2html.main --feeds feeds.yml
