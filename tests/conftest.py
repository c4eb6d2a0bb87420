import textwrap
import types

import pytest
import requests


RSS_ONE = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0">
      <channel>
        <title>Example One</title>
        <link>https://one.example.com/</link>
        <description>First example feed</description>
        <item>
          <title>One newer</title>
          <link>https://one.example.com/newer</link>
          <description>&lt;p&gt;Newer body&lt;/p&gt;</description>
          <guid isPermaLink="false">one-2</guid>
          <category>News</category>
          <pubDate>Tue, 02 Jan 2024 10:00:00 GMT</pubDate>
        </item>
        <item>
          <title>One older</title>
          <link>https://one.example.com/older</link>
          <description>Older body</description>
          <guid isPermaLink="false">one-1</guid>
          <pubDate>Fri, 29 Dec 2023 08:30:00 GMT</pubDate>
        </item>
      </channel>
    </rss>
    """
)

ATOM_TWO = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="utf-8"?>
    <feed xmlns="http://www.w3.org/2005/Atom">
      <title>Example Two</title>
      <id>urn:example:two</id>
      <updated>2024-01-03T12:00:00Z</updated>
      <entry>
        <title>Two latest</title>
        <link href="https://two.example.com/latest"/>
        <id>urn:example:two:latest</id>
        <published>2024-01-03T12:00:00Z</published>
        <updated>2024-01-03T12:00:00Z</updated>
        <author><name>Jo Writer</name></author>
        <summary>Latest summary</summary>
      </entry>
      <entry>
        <title>Two middle</title>
        <link href="https://two.example.com/middle"/>
        <id>urn:example:two:middle</id>
        <updated>2024-01-01T09:00:00Z</updated>
        <summary>Middle summary</summary>
      </entry>
    </feed>
    """
)

PODCAST_RSS = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0"
         xmlns:content="http://purl.org/rss/1.0/modules/content/"
         xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
      <channel>
        <title>Example Cast</title>
        <link>https://cast.example.com/</link>
        <description>Audio episodes</description>
        <item>
          <title>Episode 1</title>
          <link>https://cast.example.com/ep1</link>
          <description>Short notes</description>
          <content:encoded><![CDATA[<p>Full <b>show notes</b></p>]]></content:encoded>
          <comments>https://cast.example.com/ep1#comments</comments>
          <enclosure url="https://cast.example.com/ep1.mp3" length="12345" type="audio/mpeg"/>
          <itunes:duration>00:42:10</itunes:duration>
          <guid isPermaLink="false">cast-1</guid>
          <pubDate>Wed, 03 Jan 2024 06:00:00 GMT</pubDate>
        </item>
      </channel>
    </rss>
    """
)


def fake_response(content, status_error=None):
    """Build a minimal stand-in for ``requests.Response``."""
    closed = []

    def raise_for_status():
        if status_error is not None:
            raise status_error

    response = types.SimpleNamespace(
        content=content.encode("utf-8") if isinstance(content, str) else content,
        raise_for_status=raise_for_status,
        close=lambda: closed.append(True),
        closed=closed,
    )
    return response


@pytest.fixture
def feed_server(monkeypatch):
    """Route ``requests.get`` calls to canned documents keyed by URL."""
    documents = {}
    calls = []

    def fake_get(url, timeout=None, headers=None):
        calls.append({"url": url, "timeout": timeout, "headers": headers})
        payload = documents.get(url)
        if payload is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(payload, Exception):
            raise payload
        return payload

    monkeypatch.setattr("rss_mash.feeds.requests.get", fake_get)
    return types.SimpleNamespace(documents=documents, calls=calls)
