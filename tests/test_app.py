"""Tests for the Flask routes — JSON analyze endpoint, HTML form and page.

Run: pytest tests/test_app.py -v
"""
from unittest.mock import patch

import requests

from analyzer import ANALYSIS_FAILED_MESSAGE, EMPTY_INPUT_MESSAGE, AnalysisResult
from extractors import DISCUSSION_ERROR

SCRIPT = "Write a video script about eco-friendly packaging"


class TestAnalyzeApi:

    @patch("analyzer.ollama.Client")
    def test_text_analysis(self, client_cls, client):
        client_cls.return_value.chat.return_value = {"message": {"content": "**Hook:** show the unboxing"}}

        resp = client.post("/api/analyze", json={"input": SCRIPT, "inputType": "text"})

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["result"] == "**Hook:** show the unboxing"
        assert "<strong>Hook:</strong>" in body["html"]
        messages = client_cls.return_value.chat.call_args.kwargs["messages"]
        assert messages[1]["content"].endswith(SCRIPT)

    def test_empty_input_is_400(self, client):
        resp = client.post("/api/analyze", json={"input": "  ", "inputType": "url"})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": EMPTY_INPUT_MESSAGE}

    def test_non_json_body_is_400(self, client):
        resp = client.post("/api/analyze", data="input=hello")
        assert resp.status_code == 400

    def test_missing_credential_is_500(self, client, no_api_key):
        resp = client.post("/api/analyze", json={"input": SCRIPT, "inputType": "text"})
        assert resp.status_code == 500
        assert "OLLAMA_API_KEY" in resp.get_json()["error"]

    @patch("analyzer.ollama.Client")
    @patch("extractors.requests.get")
    def test_unreachable_reddit_is_400_without_model_call(self, mock_get, client_cls, client):
        mock_get.side_effect = requests.ConnectionError("down")

        resp = client.post("/api/analyze", json={
            "input": "https://www.reddit.com/r/packaging/comments/abc/eco/",
            "inputType": "url",
        })

        assert resp.status_code == 400
        assert resp.get_json() == {"error": DISCUSSION_ERROR}
        client_cls.return_value.chat.assert_not_called()

    @patch("analyzer.ollama.Client")
    def test_model_failure_is_500(self, client_cls, client):
        client_cls.return_value.chat.side_effect = RuntimeError("boom")
        resp = client.post("/api/analyze", json={"input": SCRIPT})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": ANALYSIS_FAILED_MESSAGE}

    def test_unexpected_error_hides_details(self, client):
        with patch("app.analyze", side_effect=KeyError("secret detail")):
            resp = client.post("/api/analyze", json={"input": SCRIPT})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": ANALYSIS_FAILED_MESSAGE}


class TestPages:

    def test_home(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"Content Analyzer" in resp.data

    def test_form_renders_result_html(self, client):
        with patch("app.analyze", return_value=AnalysisResult(text="- first insight")):
            resp = client.post("/analyze", data={"input": SCRIPT, "inputType": "text"})
        assert resp.status_code == 200
        assert b"<li>first insight</li>" in resp.data

    def test_form_renders_error(self, client):
        resp = client.post("/analyze", data={"input": "", "inputType": "text"})
        assert resp.status_code == 400
        assert EMPTY_INPUT_MESSAGE.encode() in resp.data
