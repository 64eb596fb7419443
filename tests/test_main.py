"""Tests for the main entry point (__main__.py)."""

import json
from unittest.mock import patch

import pytest
import requests

from request_http_parser.__main__ import main
from request_http_parser.engine import ReplayResult

RAW_REQUEST = (
    "POST /api/v1/users?page=2 HTTP/1.1\r\n"
    "Host: example.com\r\n"
    "Content-Type: application/json\r\n"
    "\r\n"
    '{"name": "John"}'
)


@pytest.fixture
def request_file(tmp_path):
    f = tmp_path / "req.txt"
    f.write_bytes(RAW_REQUEST.encode("utf-8"))
    return f


class TestMain:
    """Tests for the main function."""

    def test_missing_request_file_exits(self):
        """parse_cli calls sys.exit(1) when file doesn't exist."""
        with pytest.raises(SystemExit):
            main(["--request-file", "/nonexistent/file.txt"])

    def test_malformed_request_returns_error(self, tmp_path, capsys):
        f = tmp_path / "bad.txt"
        f.write_bytes(b"BADREQUEST\r\n\r\n")
        result = main(["--request-file", str(f)])
        assert result == 2
        assert "Error parsing request" in capsys.readouterr().err

    def test_empty_request_returns_error(self, tmp_path):
        f = tmp_path / "empty.txt"
        f.write_bytes(b"")
        assert main(["--request-file", str(f)]) == 2

    def test_prints_summary(self, request_file, capsys):
        result = main(["--request-file", str(request_file)])
        out = capsys.readouterr().out
        assert result == 0
        assert "Method : POST" in out
        assert "Path   : /api/v1/users" in out
        assert "page = 2" in out
        assert "content-type: application/json" in out
        assert "Body   : Yes" in out

    def test_empty_body_after_separator_is_present(self, tmp_path, capsys):
        f = tmp_path / "req.txt"
        f.write_bytes(b"GET /health HTTP/1.1\r\nHost: x\r\n\r\n")
        assert main(["--request-file", str(f)]) == 0
        assert "Body   : Yes" in capsys.readouterr().out

    def test_no_separator_means_no_body(self, tmp_path, capsys):
        f = tmp_path / "req.txt"
        f.write_bytes(b"GET /health HTTP/1.1\r\nHost: x")
        assert main(["--request-file", str(f)]) == 0
        assert "Body   : No" in capsys.readouterr().out

    def test_prints_json(self, request_file, capsys):
        result = main(["--request-file", str(request_file), "--json"])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "method": "POST",
            "path": "/api/v1/users",
            "params": {"page": "2"},
            "headers": {
                "host": "example.com",
                "content-type": "application/json",
            },
            "body": '{"name": "John"}',
        }

    @patch("request_http_parser.__main__.replay_request")
    def test_no_replay_without_target_host(self, mock_replay, request_file):
        assert main(["--request-file", str(request_file)]) == 0
        mock_replay.assert_not_called()

    @patch("request_http_parser.__main__.replay_request")
    def test_successful_replay(self, mock_replay, request_file, capsys):
        mock_replay.return_value = ReplayResult(
            status_code=201,
            headers={"Content-Type": "application/json"},
            body='{"id": 7}',
            elapsed=0.25,
        )
        result = main([
            "--request-file", str(request_file),
            "--target-host", "example.com",
            "--no-https",
        ])
        assert result == 0
        kwargs = mock_replay.call_args.kwargs
        assert kwargs["target_host"] == "example.com"
        assert kwargs["use_https"] is False
        assert kwargs["request"].path == "/api/v1/users"
        assert "201" in capsys.readouterr().out

    @patch("request_http_parser.__main__.replay_request")
    def test_replay_exception_returns_error(self, mock_replay, request_file):
        mock_replay.side_effect = requests.ConnectionError("Connection refused")
        result = main([
            "--request-file", str(request_file),
            "--target-host", "example.com",
        ])
        assert result == 2
