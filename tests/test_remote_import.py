"""
Tests import distant par URL.
Toutes les requêtes HTTP sont mockées.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from page_composer.blocks import HeroBlock
from page_composer.importer import FetchError, fetch_markup, import_from_url, validate_url


def _mock_response(data=None, ok=True, bad_json=False):
    resp = MagicMock()
    resp.ok = ok
    if bad_json:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = data
    return resp


HERO = {"id": "h1", "type": "hero", "content": {"headline": "Importé"}}


# ── validate_url ──────────────────────────────────────────────────────────

@pytest.mark.parametrize("url,message", [
    ("", "Please enter a valid URL"),
    ("   ", "Please enter a valid URL"),
    ("ftp://example.com", "URL must start with http:// or https://"),
    ("example.com", "URL must start with http:// or https://"),
    ("https://example.com", None),
])
def test_validate_url(url, message):
    assert validate_url(url) == message


# ── import_from_url ───────────────────────────────────────────────────────

class TestImportFromUrl:

    def test_success(self):
        resp = _mock_response({"success": True, "blocks": [HERO], "sourceUrl": "https://example.com/"})
        with patch("requests.post", return_value=resp) as mock_post:
            result = import_from_url("https://example.com", endpoint="http://svc/import")
        mock_post.assert_called_once()
        assert mock_post.call_args.kwargs["json"] == {"url": "https://example.com"}
        assert mock_post.call_args.args[0] == "http://svc/import"
        assert result.success
        assert isinstance(result.blocks[0], HeroBlock)
        assert result.blocks[0].content.headline == "Importé"
        assert result.source_url == "https://example.com/"

    def test_invalid_url_never_hits_network(self):
        with patch("requests.post") as mock_post:
            result = import_from_url("example.com")
        mock_post.assert_not_called()
        assert not result.success
        assert result.error == "URL must start with http:// or https://"

    def test_zero_blocks_is_an_error(self):
        resp = _mock_response({"success": True, "blocks": []})
        with patch("requests.post", return_value=resp):
            result = import_from_url("https://example.com")
        assert not result.success
        assert result.error == "No blocks were extracted from the page"

    def test_success_false(self):
        resp = _mock_response({"success": False, "blocks": [HERO]})
        with patch("requests.post", return_value=resp):
            assert not import_from_url("https://example.com").success

    def test_http_error_uses_server_message(self):
        resp = _mock_response({"error": "Blocked by robots.txt"}, ok=False)
        with patch("requests.post", return_value=resp):
            result = import_from_url("https://example.com")
        assert result.error == "Blocked by robots.txt"

    def test_unreadable_response(self):
        with patch("requests.post", return_value=_mock_response(bad_json=True)):
            result = import_from_url("https://example.com")
        assert not result.success
        assert result.error == "Failed to import page"

    def test_network_failure_does_not_raise(self):
        with patch("requests.post", side_effect=requests.ConnectionError("down")):
            result = import_from_url("https://example.com")
        assert not result.success
        assert result.error.startswith("Failed to import page")


# ── fetch_markup ──────────────────────────────────────────────────────────

class TestFetchMarkup:

    def test_returns_text_with_user_agent(self):
        resp = MagicMock()
        resp.text = "<h1>Bonjour</h1>"
        with patch("requests.get", return_value=resp) as mock_get:
            assert fetch_markup("https://example.com") == "<h1>Bonjour</h1>"
        assert "User-Agent" in mock_get.call_args.kwargs["headers"]
        assert mock_get.call_args.kwargs["timeout"] > 0

    def test_http_error_raises_fetch_error(self):
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        with patch("requests.get", return_value=resp):
            with pytest.raises(FetchError):
                fetch_markup("https://example.com/missing")

    def test_invalid_url_raises(self):
        with pytest.raises(FetchError, match="valid URL"):
            fetch_markup("")
