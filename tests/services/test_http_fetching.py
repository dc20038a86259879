import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock

import pytest
import requests

from wordcrawl.domain import HttpResponse
from wordcrawl.exceptions import CrawlCancelledError, HttpFetchError
from wordcrawl.services.fetcher import HttpServiceFetcher
from wordcrawl.services.http_service import HttpService


def make_client(body=b'', status_code=200, headers=None, encoding='utf-8'):
    mock_http_client = Mock()
    resp = mock_http_client.return_value
    resp.status_code = status_code
    resp.headers = headers or {}
    resp.encoding = encoding
    resp.iter_content.return_value = [body[i:i + 4] for i in range(0, len(body), 4)]
    return mock_http_client


def test_fetch_success():
    mock_http_client = make_client(b'<html><body>hello world</body></html>')
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client, timeout=5)
    response = http.fetch('https://example.com')
    assert response.status_code == 200
    assert response.text == '<html><body>hello world</body></html>'
    mock_http_client.assert_called_once_with(
        'https://example.com', headers={'User-Agent': 'TestAgent'}, timeout=5, stream=True
    )
    mock_http_client.return_value.close.assert_called_once()


def test_fetch_decodes_with_response_encoding():
    mock_http_client = make_client('prix 5€'.encode('utf-8'), encoding=None)
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('https://example.com').text == 'prix 5€'

    mock_http_client = make_client('café'.encode('latin-1'), encoding='ISO-8859-1')
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('https://example.com').text == 'café'


def test_fetch_wraps_requests_exception():
    mock_http_client = Mock()
    mock_http_client.side_effect = requests.exceptions.Timeout("timed out")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError) as excinfo:
        http.fetch('https://example.com')
    assert "https://example.com" in str(excinfo.value)
    assert isinstance(excinfo.value.original, requests.exceptions.Timeout)


def test_fetch_wraps_errors_while_reading_the_body():
    mock_http_client = make_client()
    mock_http_client.return_value.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("reset")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(HttpFetchError):
        http.fetch('https://example.com')
    mock_http_client.return_value.close.assert_called_once()


def test_fetch_content_type_from_headers():
    mock_http_client = make_client(b'<html>test</html>', headers={'Content-Type': 'text/html; charset=utf-8'})
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)
    assert http.fetch('https://example.com').content_type == 'text/html; charset=utf-8'


def test_fetch_bubbles_unexpected_exceptions():
    mock_http_client = Mock()
    mock_http_client.side_effect = RuntimeError("Real bug")
    http = HttpService(user_agent='TestAgent', http_client=mock_http_client)

    with pytest.raises(RuntimeError):
        http.fetch('https://example.com')


class DripHandler(BaseHTTPRequestHandler):
    """Announces a 20 KiB body and sends it 1 KiB every 0.2s."""

    def do_GET(self):
        self.send_response(200)
        self.send_header('Content-Type', 'text/html')
        self.send_header('Content-Length', str(20 * 1024))
        self.end_headers()
        try:
            for _ in range(20):
                self.wfile.write(b'a' * 1024)
                self.wfile.flush()
                time.sleep(0.2)
        except OSError:
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture
def drip_server():
    server = ThreadingHTTPServer(('127.0.0.1', 0), DripHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f'http://127.0.0.1:{server.server_address[1]}/'
    server.shutdown()
    server.server_close()


def test_timeout_caps_a_slowly_sent_body(drip_server):
    session = requests.Session()
    session.trust_env = False
    http = HttpService(user_agent='TestAgent', http_client=session.get, timeout=0.5)

    started = time.monotonic()
    with pytest.raises(HttpFetchError) as excinfo:
        http.fetch(drip_server)
    elapsed = time.monotonic() - started

    assert elapsed < 1.5
    assert isinstance(excinfo.value.original, requests.exceptions.Timeout)


def test_response_media_types():
    assert HttpResponse(200, '').is_textual
    assert HttpResponse(200, '', 'text/html; charset=utf-8').is_textual
    assert HttpResponse(200, '', 'application/xhtml+xml').is_textual
    assert HttpResponse(200, '', 'application/rss+xml').is_textual
    assert not HttpResponse(200, '', 'image/png').is_textual
    assert not HttpResponse(200, '', 'application/pdf').is_textual
    assert HttpResponse(204, '').is_success
    assert not HttpResponse(404, '').is_success


def test_fetcher_delegates_to_http_service():
    http_service = Mock()
    http_service.fetch.return_value = HttpResponse(200, 'body')
    fetcher = HttpServiceFetcher(http_service)

    assert fetcher.fetch('https://example.com', stop_event=threading.Event()).text == 'body'
    http_service.fetch.assert_called_once_with('https://example.com')


def test_fetcher_refuses_after_cancellation():
    http_service = Mock()
    fetcher = HttpServiceFetcher(http_service)
    stop_event = threading.Event()
    stop_event.set()

    with pytest.raises(CrawlCancelledError):
        fetcher.fetch('https://example.com', stop_event=stop_event)
    assert not http_service.fetch.called
