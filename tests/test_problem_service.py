"""Tests for fetching problems, submitting solutions and downloading files."""

import json

import httpx
import pytest

from hackattic.exceptions import DownloadError, FetchError, HTTPError, SubmitError, TransportError
from hackattic.schemas.reading_qr import ReadingQrSolution
from tests.test_utils import ACCESS_TOKEN


class TestFetchProblem:
    def test_fetch_problem_url_and_body(self, make_problem_client):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["query"] = dict(request.url.params)
            return httpx.Response(200, json={"image_url": "https://hackattic.test/q.png"})

        body = make_problem_client(handler).fetch_problem("reading_qr", ACCESS_TOKEN)

        assert json.loads(body) == {"image_url": "https://hackattic.test/q.png"}
        assert captured == {
            "method": "GET",
            "path": "/challenges/reading_qr/problem",
            "query": {"access_token": ACCESS_TOKEN},
        }

    def test_fetch_http_error_wrapped(self, make_problem_client):
        client = make_problem_client(lambda request: httpx.Response(401, text="bad token"))

        with pytest.raises(FetchError) as exc_info:
            client.fetch_problem("reading_qr", ACCESS_TOKEN)

        assert isinstance(exc_info.value.__cause__, HTTPError)
        assert exc_info.value.__cause__.status_code == 401

    def test_fetch_transport_error_wrapped(self, make_problem_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(FetchError) as exc_info:
            make_problem_client(handler).fetch_problem("reading_qr", ACCESS_TOKEN)

        assert isinstance(exc_info.value.__cause__, TransportError)


class TestSubmitSolution:
    def test_submit_posts_json(self, make_problem_client):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["query"] = dict(request.url.params)
            captured["content_type"] = request.headers["content-type"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"result": "passed"})

        client = make_problem_client(handler)
        ack = client.submit_solution("reading_qr", ACCESS_TOKEN, ReadingQrSolution(code="abc"))

        assert json.loads(ack) == {"result": "passed"}
        assert captured == {
            "method": "POST",
            "path": "/challenges/reading_qr/solve",
            "query": {"access_token": ACCESS_TOKEN},
            "content_type": "application/json",
            "body": {"code": "abc"},
        }

    def test_submit_accepts_plain_dict(self, make_problem_client):
        client = make_problem_client(lambda request: httpx.Response(200, text="ok"))

        assert client.submit_solution("x", ACCESS_TOKEN, {"answer": 1}) == b"ok"

    def test_submit_error_wrapped(self, make_problem_client):
        client = make_problem_client(lambda request: httpx.Response(400, text="wrong"))

        with pytest.raises(SubmitError) as exc_info:
            client.submit_solution("x", ACCESS_TOKEN, {"answer": 1})

        assert exc_info.value.__cause__.body == b"wrong"


class TestDownloadFile:
    def test_download_strips_base_url(self, make_problem_client, tmp_path):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            return httpx.Response(200, content=b"\x89PNG-data")

        destination = tmp_path / "image.png"
        make_problem_client(handler).download_file(
            destination, "https://hackattic.test/static/qr/abc.png"
        )

        assert destination.read_bytes() == b"\x89PNG-data"
        assert captured["url"] == "https://hackattic.test/static/qr/abc.png"

    def test_download_truncates_existing_file(self, make_problem_client, tmp_path):
        destination = tmp_path / "image.png"
        destination.write_bytes(b"old contents that are longer")

        make_problem_client(lambda request: httpx.Response(200, content=b"new")).download_file(
            destination, "https://hackattic.test/f"
        )

        assert destination.read_bytes() == b"new"

    def test_download_foreign_host_fetched_as_is(self, make_problem_client, tmp_path):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["host"] = request.url.host
            captured["path"] = request.url.path
            return httpx.Response(200, content=b"data")

        make_problem_client(handler).download_file(
            tmp_path / "f.bin", "https://cdn.example.com/files/f.bin"
        )

        assert captured == {"host": "cdn.example.com", "path": "/files/f.bin"}

    def test_download_http_error_leaves_no_file(self, make_problem_client, tmp_path):
        destination = tmp_path / "image.png"
        client = make_problem_client(lambda request: httpx.Response(404, text="gone"))

        with pytest.raises(DownloadError):
            client.download_file(destination, "https://hackattic.test/missing.png")

        assert not destination.exists()

    def test_download_io_error_wrapped(self, make_problem_client, tmp_path):
        client = make_problem_client(lambda request: httpx.Response(200, content=b"data"))

        with pytest.raises(DownloadError) as exc_info:
            client.download_file(tmp_path / "no-such-dir" / "f.png", "https://hackattic.test/f")

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_download_http_error_keeps_existing_file(self, make_problem_client, tmp_path):
        destination = tmp_path / "notes.txt"
        destination.write_bytes(b"user data")
        client = make_problem_client(lambda request: httpx.Response(404, text="gone"))

        with pytest.raises(DownloadError):
            client.download_file(destination, "https://hackattic.test/missing.png")

        assert destination.read_bytes() == b"user data"

    def test_download_connect_error_keeps_existing_file(self, make_problem_client, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        destination = tmp_path / "notes.txt"
        destination.write_bytes(b"user data")

        with pytest.raises(DownloadError):
            make_problem_client(handler).download_file(destination, "https://hackattic.test/f")

        assert destination.read_bytes() == b"user data"

    def test_download_interrupted_body_removes_partial_file(self, make_problem_client, tmp_path):
        def broken_body():
            yield b"first half"
            raise httpx.ReadError("connection reset")

        destination = tmp_path / "image.png"
        client = make_problem_client(lambda request: httpx.Response(200, content=broken_body()))

        with pytest.raises(DownloadError) as exc_info:
            client.download_file(destination, "https://hackattic.test/f")

        assert isinstance(exc_info.value.__cause__, TransportError)
        assert not destination.exists()
