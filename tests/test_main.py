import pytest

from rss2html import main as cli
from rss2html.main import main, convert, convert_all, html_filename
from rss2html.util.errors import InvalidFeedError

FEED_XML = """<rss version="2.0">
  <channel>
    <title>My Feed</title>
    <link>http://x</link>
    <description>Desc</description>
    <item>
      <pubDate>Mon</pubDate>
      <source url="http://s">Src</source>
      <title>T</title>
      <link>http://i</link>
    </item>
  </channel>
</rss>
"""

ATOM_XML = """<feed version="2.0"><title>Atom</title></feed>"""


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RSS_FEEDS_PATH", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    (tmp_path / "feed.xml").write_text(FEED_XML, encoding="utf-8")
    (tmp_path / "atom.xml").write_text(ATOM_XML, encoding="utf-8")
    return tmp_path


def test_html_filename():
    assert html_filename("out") == "out.html"
    assert html_filename(" out.html ") == "out.html"
    assert html_filename("OUT.HTML") == "OUT.HTML"

def test_convert_writes_file(workdir):
    path = convert("feed.xml", "news")
    assert path == "news.html"
    html = (workdir / "news.html").read_text(encoding="utf-8")
    assert "<title>title</title>" in html
    assert '<a href="http://i">T</a>' in html

def test_convert_invalid_creates_no_file(workdir):
    with pytest.raises(InvalidFeedError):
        convert("atom.xml", "news")
    assert not (workdir / "news.html").exists()

def test_main_with_arguments(workdir, capsys):
    assert main(["feed.xml", "-o", "out"]) == 0
    assert (workdir / "out.html").exists()
    assert "out.html" in capsys.readouterr().out

def test_main_invalid_feed(workdir, capsys):
    assert main(["atom.xml", "-o", "out"]) == 1
    assert capsys.readouterr().out.strip() == "invalid url"
    assert not (workdir / "out.html").exists()

def test_main_prompts_for_missing_values(workdir, monkeypatch, capsys):
    answers = iter(["feed.xml", "prompted"])
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr("builtins.input", fake_input)
    assert main([]) == 0
    assert prompts == ["Enter an RSS 2.0 URL: ", "Enter output file name: "]
    assert (workdir / "prompted.html").exists()

def test_main_reports_fetch_errors(workdir, capsys):
    assert main(["missing.xml", "-o", "out"]) == 1
    assert "Error:" in capsys.readouterr().err
    assert not (workdir / "out.html").exists()

def test_convert_all_skips_failures(workdir, capsys):
    feeds = [
        {"name": "good", "url": "feed.xml", "output": "good"},
        {"name": "atom", "url": "atom.xml"},
        {"name": "gone", "url": "gone.xml"},
    ]
    assert convert_all(feeds) == 2
    assert (workdir / "good.html").exists()
    assert not (workdir / "atom.html").exists()
    assert "Wrote good to: good.html" in capsys.readouterr().out

def test_main_batch_from_yaml(workdir):
    (workdir / "feeds.yml").write_text(
        "- name: first\n  url: feed.xml\n  output: first\n"
        "- name: second\n  url: feed.xml\n",
        encoding="utf-8",
    )
    assert main(["--feeds", "feeds.yml"]) == 0
    assert (workdir / "first.html").exists()
    assert (workdir / "second.html").exists()

def test_main_batch_from_env(workdir, monkeypatch):
    (workdir / "list.yml").write_text("- name: bad\n  url: atom.xml\n", encoding="utf-8")
    monkeypatch.setenv("RSS_FEEDS_PATH", "list.yml")
    assert main([]) == 1

def test_load_feeds_empty_file(workdir):
    (workdir / "empty.yml").write_text("", encoding="utf-8")
    assert cli.load_feeds("empty.yml") == []

NO_LINK_XML = """<rss version="2.0"><channel><title>My Feed</title></channel></rss>"""
NO_CHANNEL_XML = """<rss version="2.0"><item><title>T</title></item></rss>"""


def test_convert_missing_link_creates_no_file(workdir):
    (workdir / "nolink.xml").write_text(NO_LINK_XML, encoding="utf-8")
    with pytest.raises(LookupError):
        convert("nolink.xml", "news")
    assert not (workdir / "news.html").exists()

def test_main_missing_link_creates_no_file(workdir, capsys):
    (workdir / "nolink.xml").write_text(NO_LINK_XML, encoding="utf-8")
    assert main(["nolink.xml", "-o", "out"]) == 1
    assert "Error:" in capsys.readouterr().err
    assert not (workdir / "out.html").exists()

def test_convert_all_continues_after_malformed_channel(workdir):
    (workdir / "nochannel.xml").write_text(NO_CHANNEL_XML, encoding="utf-8")
    feeds = [
        {"name": "bad", "url": "nochannel.xml", "output": "bad"},
        {"name": "good", "url": "feed.xml", "output": "good"},
    ]
    assert convert_all(feeds) == 1
    assert not (workdir / "bad.html").exists()
    assert (workdir / "good.html").exists()
